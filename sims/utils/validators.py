"""
Field rules for student records.

This is the only copy of the rules: the API validates with them before
persisting, and the browser UI downloads them from ``GET /students/rules``
and runs the same patterns before submitting. Patterns are written in the
subset of regex syntax shared by Python and JavaScript and are matched with
ASCII semantics so ``\\d`` means ``[0-9]`` on both sides. Whitespace is
spelled as an explicit class because ``\\s`` differs between the two.
"""

import re
from typing import List, Mapping, Optional, Tuple

from pydantic import ConfigDict, Field, computed_field

from sims.schemas.camel_base_model import CamelCaseBaseModel as BaseModel
from sims.utils.errors import ValidationError

STUDENT_ID_PATTERN = r"^[A-Z]{1,4}-\d{3}-\d{5}$"
FULL_NAME_PATTERN = r"^[A-Za-z ]{2,}$"
GMAIL_PATTERN = r"^[A-Za-z0-9._%+-]+@gmail\.com$"
NUMERIC_YEAR_PATTERN = r"^\d+$"
ORDINAL_YEAR_PATTERN = r"^\d(st|nd|rd|th)[ \t]+Year$"


class FieldRule(BaseModel):
    """A single field's rule: required, optionally matching one of `patterns`."""

    model_config = ConfigDict(frozen=True)

    field: str = Field(..., description="camelCase record field name")
    label: str = Field(..., description="Label shown in the UI")
    message: str = Field(..., description="Message reported when the pattern fails")
    patterns: Tuple[str, ...] = Field(
        default=(), description="Any one of these must match the whole value"
    )
    ignore_case: bool = Field(default=False, description="Match case-insensitively")

    @computed_field
    @property
    def flags(self) -> str:
        """JavaScript RegExp flags equivalent to the Python matching mode"""
        return "i" if self.ignore_case else ""

    def _compiled(self):
        flags = re.ASCII | (re.IGNORECASE if self.ignore_case else 0)
        return [re.compile(pattern, flags) for pattern in self.patterns]

    def matches(self, value: str) -> bool:
        if not value.strip():
            return False
        if not self.patterns:
            return True
        return any(regex.fullmatch(value) for regex in self._compiled())

    def failure(self, value: str) -> Optional[str]:
        """Return the message for `value`, or None if it passes"""
        if not value.strip():
            return f"Missing field: {self.field}"
        if not self.matches(value):
            return self.message
        return None


STUDENT_RULES: Tuple[FieldRule, ...] = (
    FieldRule(
        field="studentId",
        label="Student ID",
        message="Student ID format invalid (e.g., BP-113-00001).",
        patterns=(STUDENT_ID_PATTERN,),
    ),
    FieldRule(
        field="fullName",
        label="Full Name",
        message="Full Name must be letters/spaces.",
        patterns=(FULL_NAME_PATTERN,),
    ),
    FieldRule(
        field="gender",
        label="Gender",
        message="Gender is required.",
    ),
    FieldRule(
        field="gmail",
        label="Gmail",
        message="Email must be a valid Gmail address.",
        patterns=(GMAIL_PATTERN,),
        ignore_case=True,
    ),
    FieldRule(
        field="program",
        label="Program",
        message="Program is required.",
    ),
    FieldRule(
        field="yearLevel",
        label="Year Level",
        message='Year Level must be like "1st Year" or a number.',
        patterns=(NUMERIC_YEAR_PATTERN, ORDINAL_YEAR_PATTERN),
        ignore_case=True,
    ),
    FieldRule(
        field="university",
        label="University",
        message="University is required.",
    ),
)

STUDENT_FIELDS: Tuple[str, ...] = tuple(rule.field for rule in STUDENT_RULES)


def validation_rules() -> List[FieldRule]:
    return list(STUDENT_RULES)


def validate_student(data: Mapping[str, str]) -> None:
    """
    Validate a candidate record given as a camelCase mapping.

    Fields are checked in `STUDENT_RULES` order and the first failure raises
    `ValidationError` naming that field. Missing keys count as empty.
    """
    for rule in STUDENT_RULES:
        message = rule.failure(str(data.get(rule.field) or ""))
        if message is not None:
            raise ValidationError(field=rule.field, message=message)
