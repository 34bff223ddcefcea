from typing import Any, Dict, List, Optional
from fastapi import status, Request
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from sims.schemas.response_schemas import ErrorResponse


class ResponseBuilder:
    """Builder class for creating standardized responses"""

    @staticmethod
    def success(
        request: Request,
        data: Any = None,
        status_code: int = status.HTTP_200_OK,
    ) -> JSONResponse:
        """Create a success response; models are emitted with their camelCase aliases"""
        if isinstance(data, BaseModel):
            content = data.model_dump(by_alias=True)
        elif isinstance(data, list):
            content = [
                item.model_dump(by_alias=True) if isinstance(item, BaseModel) else item
                for item in data
            ]
        else:
            content = jsonable_encoder(data)
        return JSONResponse(status_code=status_code, content=content)

    @staticmethod
    def error(
        request: Request,
        message: str = "An error occurred",
        errors: Optional[List[Dict[str, Any]]] = None,
        error_code: Optional[str] = None,
        status_code: int = status.HTTP_400_BAD_REQUEST,
        field: Optional[str] = None,
        meta: Optional[Dict[str, Any]] = None,
    ) -> JSONResponse:
        """Create an error response"""
        response = ErrorResponse(
            error=message,
            error_code=error_code,
            field=field,
            errors=errors,
            meta=meta or None,
            request_id=getattr(request.state, "request_id", None),
            path=str(request.url.path),
        )
        return JSONResponse(
            status_code=status_code,
            content=response.model_dump(by_alias=True, exclude_none=True),
        )
