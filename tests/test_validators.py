import pytest

from sims.utils.errors import ValidationError
from sims.utils.validators import (
    STUDENT_FIELDS,
    validate_student,
    validation_rules,
)


def rule(field):
    return next(r for r in validation_rules() if r.field == field)


class TestFieldRules:
    """Per-field predicates."""

    @pytest.mark.parametrize(
        "value", ["BP-113-00001", "B-000-12345", "BSIT-221-00003"]
    )
    def test_student_id_accepts(self, value):
        assert rule("studentId").matches(value)

    @pytest.mark.parametrize(
        "value",
        [
            "bp-113-00001",  # lowercase prefix
            "BSITX-221-00003",  # prefix too long
            "BP-11-00001",
            "BP-113-0001",
            "BP11300001",
            "BP-113-00001\n",  # trailing newline must not slip through `$`
            "BP-١١٣-00001",  # non-ASCII digits
            "",
        ],
    )
    def test_student_id_rejects(self, value):
        assert not rule("studentId").matches(value)

    def test_full_name(self):
        assert rule("fullName").matches("Chelsea Greer")
        assert rule("fullName").matches("Al")
        assert not rule("fullName").matches("A")
        assert not rule("fullName").matches("Chelsea Greer 2")
        assert not rule("fullName").matches("Zoë Smith")
        assert not rule("fullName").matches("   ")

    def test_gmail_is_case_insensitive(self):
        assert rule("gmail").matches("chelseagreer@gmail.com")
        assert rule("gmail").matches("Chelsea.Greer+lab@GMAIL.COM")
        assert not rule("gmail").matches("chelsea@yahoo.com")
        assert not rule("gmail").matches("chelsea@gmail.com.ph")
        assert not rule("gmail").matches("@gmail.com")

    @pytest.mark.parametrize(
        "value", ["1", "5", "12", "1st Year", "2nd year", "3RD YEAR", "5th   Year", "4th\tYear"]
    )
    def test_year_level_accepts(self, value):
        assert rule("yearLevel").matches(value)

    @pytest.mark.parametrize(
        "value",
        ["five", "5th", "Year 5", "10th Year", "-1", "5 Year", "5th Year ", "1st\u00a0Year"],
    )
    def test_year_level_rejects(self, value):
        assert not rule("yearLevel").matches(value)

    def test_presence_only_fields(self):
        assert rule("gender").failure("Female") is None
        assert rule("gender").failure("anything goes") is None
        assert rule("gender").failure("  ") == "Missing field: gender"
        assert rule("program").failure("") == "Missing field: program"
        assert rule("university").failure("\t") == "Missing field: university"


class TestValidateStudent:
    """Whole-record validation."""

    def test_valid_record_passes(self, valid_student):
        validate_student(valid_student)

    @pytest.mark.parametrize(
        "field,bad_value",
        [
            ("studentId", "BP-113-1"),
            ("fullName", "Chelsea_Greer"),
            ("gender", ""),
            ("gmail", "chelsea@outlook.com"),
            ("program", "   "),
            ("yearLevel", "five"),
            ("university", ""),
        ],
    )
    def test_single_bad_field_is_named(self, valid_student, field, bad_value):
        with pytest.raises(ValidationError) as exc_info:
            validate_student({**valid_student, field: bad_value})

        assert exc_info.value.field == field
        assert exc_info.value.message

    def test_first_failing_field_wins(self, valid_student):
        record = {**valid_student, "gmail": "nope", "studentId": "nope"}

        with pytest.raises(ValidationError) as exc_info:
            validate_student(record)

        assert exc_info.value.field == "studentId"

    def test_missing_key_counts_as_empty(self, valid_student):
        record = dict(valid_student)
        del record["university"]

        with pytest.raises(ValidationError) as exc_info:
            validate_student(record)

        assert exc_info.value.field == "university"
        assert exc_info.value.message == "Missing field: university"


class TestPublishedRules:
    """The rule set served to the UI."""

    def test_rules_cover_every_field_in_order(self):
        assert [rule.field for rule in validation_rules()] == list(STUDENT_FIELDS)
        assert STUDENT_FIELDS == (
            "studentId",
            "fullName",
            "gender",
            "gmail",
            "program",
            "yearLevel",
            "university",
        )

    def test_rules_serialize_with_js_flags(self):
        dumped = {
            rule["field"]: rule
            for rule in (r.model_dump(by_alias=True) for r in validation_rules())
        }

        assert dumped["gmail"]["flags"] == "i"
        assert dumped["gmail"]["ignoreCase"] is True
        assert dumped["studentId"]["flags"] == ""
        assert dumped["yearLevel"]["patterns"] == [r"^\d+$", r"^\d(st|nd|rd|th)[ \t]+Year$"]
        assert dumped["gender"]["patterns"] == []
