from typing import Any, Dict, List, Optional

from pydantic import ConfigDict, Field, field_validator

from sims.schemas.camel_base_model import CamelCaseBaseModel as BaseModel


class StudentRecord(BaseModel):
    """A student record as stored in the data file and exchanged with the UI"""

    model_config = ConfigDict(extra="ignore")

    student_id: str = Field(default="", description="e.g. BP-113-00001")
    full_name: str = Field(default="", description="Letters and spaces only")
    gender: str = Field(default="", description="Free-form")
    gmail: str = Field(default="", description="@gmail.com address")
    program: str = Field(default="", description="Degree program")
    year_level: str = Field(default="", description='"5th Year" or a bare number')
    university: str = Field(default="", description="University / campus")

    @field_validator("*", mode="before")
    @classmethod
    def coerce_to_string(cls, value: Any) -> Any:
        """Missing values become "" and scalars their string form; rules run afterwards"""
        if value is None:
            return ""
        if isinstance(value, float) and value.is_integer():
            return str(int(value))
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return str(value)
        return value

    def to_camel_dict(self) -> Dict[str, str]:
        return self.model_dump(by_alias=True)


class ChatRequest(BaseModel):
    message: Optional[str] = Field(default=None, description="Free-text question")


class ChatResponse(BaseModel):
    reply: str = Field(..., description="Answer text from the language model")


class ImportSummary(BaseModel):
    """Result of merging pipe-separated rows into the data file"""

    parsed: int = 0
    added: int = 0
    total: int = 0
    skipped: List[str] = Field(default_factory=list)
