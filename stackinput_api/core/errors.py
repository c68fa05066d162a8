"""
Application exceptions and error handling.

Maps input errors to HTTP responses with a consistent JSON body:
``{"error": {"type": ..., "message": ..., "details": ...}}``.
"""

from typing import Any, Dict, Optional
from fastapi import HTTPException, Request, status
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError

from stackinput.errors import CasEvaluationError, StackError, ValidationError

from .logging import get_logger

logger = get_logger(__name__)


class ApiError(Exception):
    """Base exception for API errors"""

    def __init__(
        self,
        message: str,
        status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR,
        details: Optional[Dict[str, Any]] = None
    ):
        self.message = message
        self.status_code = status_code
        self.details = details or {}
        super().__init__(self.message)


class UnknownInputTypeError(ApiError):
    """Raised when a request names an input type that is not registered"""

    def __init__(self, input_type: str):
        super().__init__(
            message=f"Input type '{input_type}' not found",
            status_code=status.HTTP_404_NOT_FOUND,
            details={"input_type": input_type}
        )


class BadParametersError(ApiError):
    """Raised when input parameters are rejected"""

    def __init__(self, error: str):
        super().__init__(
            message=error,
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        )


def stack_error_status(error: StackError) -> int:
    """HTTP status for an input error"""
    if isinstance(error, CasEvaluationError):
        return status.HTTP_502_BAD_GATEWAY
    if isinstance(error, ValidationError):
        return status.HTTP_422_UNPROCESSABLE_ENTITY
    return status.HTTP_500_INTERNAL_SERVER_ERROR


def create_error_response(
    error: Exception,
    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR,
    details: Optional[Dict[str, Any]] = None,
) -> JSONResponse:
    """Create standardized error response"""

    error_data: Dict[str, Any] = {
        "error": {
            "type": error.__class__.__name__,
            "message": str(error),
        }
    }
    if details:
        error_data["error"]["details"] = details

    log = logger.error if status_code >= 500 else logger.warning
    log(
        f"Error occurred: {error}",
        extra_data={
            "error_type": error.__class__.__name__,
            "status_code": status_code,
        },
    )

    return JSONResponse(
        status_code=status_code,
        content=error_data
    )


# Exception Handlers

async def api_error_handler(request: Request, exc: ApiError) -> JSONResponse:
    """Handle ApiError exceptions"""
    return create_error_response(exc, exc.status_code, exc.details)


async def stack_error_handler(request: Request, exc: StackError) -> JSONResponse:
    """Handle input errors raised by the library"""
    return create_error_response(exc, stack_error_status(exc), exc.details)


async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
    """Handle HTTPException exceptions"""
    return JSONResponse(
        status_code=exc.status_code,
        content={
            "error": {
                "type": "HTTPException",
                "message": exc.detail,
            }
        }
    )


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Handle request validation errors"""
    logger.warning(
        "Validation error",
        extra_data={"errors": exc.errors()}
    )

    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={
            "error": {
                "type": "ValidationError",
                "message": "Request validation failed",
                "details": jsonable_errors(exc),
            }
        }
    )


def jsonable_errors(exc: RequestValidationError) -> list:
    """Request validation errors without non-serialisable context"""
    return [
        {key: value for key, value in error.items() if key in ("loc", "msg", "type")}
        for error in exc.errors()
    ]


async def generic_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle unexpected errors"""
    logger.exception(
        "Unexpected error occurred",
        extra_data={"path": request.url.path}
    )

    from .config import settings
    message = str(exc) if settings.DEBUG else "An internal error occurred"

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "error": {
                "type": "InternalServerError",
                "message": message,
            }
        }
    )


def register_error_handlers(app):
    """Register error handlers with FastAPI app"""
    app.add_exception_handler(ApiError, api_error_handler)
    app.add_exception_handler(StackError, stack_error_handler)
    app.add_exception_handler(HTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(Exception, generic_error_handler)
