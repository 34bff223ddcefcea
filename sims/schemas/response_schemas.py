from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import Field

from sims.schemas.camel_base_model import CamelCaseBaseModel as BaseModel


class ErrorResponse(BaseModel):
    """Standardized error body: `error` is the human-readable message"""

    error: str = Field(..., description="Human-readable message")
    error_code: Optional[str] = Field(default=None, description="Machine-readable code")
    field: Optional[str] = Field(
        default=None, description="Offending record field for validation errors"
    )
    errors: Optional[List[Dict[str, Any]]] = Field(
        default=None, description="Error details"
    )
    meta: Optional[Dict[str, Any]] = Field(
        default=None, description="Additional metadata"
    )
    request_id: Optional[str] = Field(default=None, description="Request identifier")
    path: Optional[str] = Field(default=None, description="Request path")
    timestamp: str = Field(
        default_factory=lambda: datetime.now().isoformat(),
        description="Response timestamp",
    )


class HealthResponse(BaseModel):
    ok: bool = True
