from typing import Optional

from fastapi import FastAPI, Request, status
from starlette.exceptions import HTTPException as StarletteHTTPException
from fastapi.exceptions import RequestValidationError
import traceback
from .logging import get_logger
from .responses import ResponseBuilder

logger = get_logger()


class ValidationError(Exception):
    """A record field failed its format rule. Recoverable by resubmission."""

    def __init__(
        self, field: str, message: str, error_code: str = "VALIDATION_ERROR"
    ):
        super().__init__(message)
        self.field = field
        self.message = message
        self.error_code = error_code


class ConflictError(Exception):
    """Custom exception for duplicate identifiers."""

    def __init__(
        self,
        message: str = "Student ID already exists.",
        error_code: str = "STUDENT_ID_EXISTS",
    ):
        super().__init__(message)
        self.message = message
        self.error_code = error_code


class NotFoundError(Exception):
    """Custom exception for resource not found errors."""

    def __init__(self, message: str = "Not found", error_code: str = "STUDENT_NOT_FOUND"):
        super().__init__(message)
        self.message = message
        self.error_code = error_code


class StorageUnavailable(Exception):
    """The student data file could not be read or written."""

    def __init__(
        self,
        message: str = "Student data storage is unavailable.",
        error_code: str = "STORAGE_UNAVAILABLE",
    ):
        super().__init__(message)
        self.message = message
        self.error_code = error_code


class BusinessLogicError(Exception):
    """Custom exception for business logic errors."""

    def __init__(self, message: str, error_code: str = "BLOC_ERROR"):
        super().__init__(message)
        self.message = message
        self.error_code = error_code


class ConfigurationError(Exception):
    """Server-side configuration (e.g. the LLM credential) is missing."""

    def __init__(
        self,
        message: str = "LLM API key not configured on the server.",
        error_code: str = "LLM_NOT_CONFIGURED",
    ):
        super().__init__(message)
        self.message = message
        self.error_code = error_code


class UpstreamError(Exception):
    """The upstream language-model service failed, timed out or answered nothing."""

    def __init__(
        self,
        message: str = "Failed to contact LLM API.",
        error_code: str = "UPSTREAM_ERROR",
        detail: Optional[str] = None,
    ):
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.detail = detail


def setup_error_handlers(app: FastAPI):
    """Setup custom error handlers."""

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        logger.error(f"HTTP Exception: {exc.status_code} - {exc.detail}")
        return ResponseBuilder.error(
            request=request,
            message=str(exc.detail),
            error_code="HTTP_ERROR",
            status_code=exc.status_code,
            meta={"http_status": exc.status_code},
        )

    """
    A malformed body (not an object, wrong JSON) is a validation failure like any other: 400.
    """

    @app.exception_handler(RequestValidationError)
    async def request_validation_exception_handler(
        request: Request, exc: RequestValidationError
    ):
        logger.error(f"Request Validation Error: {exc.errors()}")

        formatted_errors = []
        for error in exc.errors():
            field_path = " -> ".join(str(loc) for loc in error["loc"])
            formatted_errors.append(
                {
                    "field": field_path,
                    "message": error["msg"],
                    "type": error["type"],
                }
            )

        first_field = None
        if formatted_errors:
            loc = exc.errors()[0]["loc"]
            first_field = str(loc[-1]) if loc else None

        return ResponseBuilder.error(
            request=request,
            message="Request validation failed",
            errors=formatted_errors,
            error_code="VALIDATION_ERROR",
            field=first_field,
            status_code=status.HTTP_400_BAD_REQUEST,
        )

    @app.exception_handler(ValidationError)
    async def record_validation_exception_handler(
        request: Request, exc: ValidationError
    ):
        logger.warning(f"Validation Error: {exc.field} - {exc.message}")

        return ResponseBuilder.error(
            request=request,
            message=exc.message,
            error_code=exc.error_code,
            field=exc.field,
            status_code=status.HTTP_400_BAD_REQUEST,
        )

    @app.exception_handler(ConflictError)
    async def conflict_exception_handler(request: Request, exc: ConflictError):
        logger.warning(f"Conflict Error: {exc.message}")

        return ResponseBuilder.error(
            request=request,
            message=exc.message,
            error_code=exc.error_code,
            status_code=status.HTTP_409_CONFLICT,
        )

    @app.exception_handler(NotFoundError)
    async def not_found_exception_handler(request: Request, exc: NotFoundError):
        logger.warning(f"Not Found Error: {exc.message}")

        return ResponseBuilder.error(
            request=request,
            message=exc.message,
            error_code=exc.error_code,
            status_code=status.HTTP_404_NOT_FOUND,
        )

    @app.exception_handler(StorageUnavailable)
    async def storage_exception_handler(request: Request, exc: StorageUnavailable):
        logger.error(f"Storage Error: {exc.message}")

        # Don't expose file system details to users
        return ResponseBuilder.error(
            request=request,
            message=exc.message,
            error_code=exc.error_code,
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            meta={"error_type": "STORAGE_ERROR"},
        )

    @app.exception_handler(BusinessLogicError)
    async def business_logic_exception_handler(
        request: Request, exc: BusinessLogicError
    ):
        logger.error(f"Business Logic Error: {exc.message}")

        return ResponseBuilder.error(
            request=request,
            message=exc.message,
            error_code=exc.error_code,
            status_code=status.HTTP_400_BAD_REQUEST,
            meta={"error_type": "BUSINESS_ERROR"},
        )

    @app.exception_handler(ConfigurationError)
    async def configuration_exception_handler(
        request: Request, exc: ConfigurationError
    ):
        logger.error(f"Configuration Error: {exc.message}")

        return ResponseBuilder.error(
            request=request,
            message=exc.message,
            error_code=exc.error_code,
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            meta={"error_type": "CONFIGURATION_ERROR"},
        )

    @app.exception_handler(UpstreamError)
    async def upstream_exception_handler(request: Request, exc: UpstreamError):
        logger.error(f"Upstream Error: {exc.message} ({exc.detail})")

        return ResponseBuilder.error(
            request=request,
            message=exc.message,
            error_code=exc.error_code,
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            meta={"error_type": "UPSTREAM_ERROR"},
        )

    @app.exception_handler(Exception)
    async def general_exception_handler(request: Request, exc: Exception):
        """Handle all other unhandled exceptions"""
        logger.error(f"Unhandled Exception: {str(exc)}")
        logger.error(f"Traceback: {traceback.format_exc()}")

        return ResponseBuilder.error(
            request=request,
            message="An internal server error occurred",
            error_code="INTERNAL_ERROR",
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            meta={"error_type": "INTERNAL_ERROR"},
        )
