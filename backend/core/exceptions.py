"""
Custom exceptions and handlers for consistent API error responses.

Every error leaves the API in the same shape, ``{"errorMessage": "..."}``.
Services raise the exceptions defined here (or plain ``ValueError``) and the
handlers registered by :func:`register_exception_handlers` translate them
into HTTP responses in one place.
"""

import logging
from typing import Any, Dict, Optional

from fastapi import HTTPException, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)

NULL_ARGUMENT_MESSAGE = "인자 중 null 값이 존재합니다."
UNEXPECTED_ERROR_MESSAGE = "예상치 못한 예외가 발생했습니다. 관리자에게 문의하세요."
NOT_LOGGED_IN_MESSAGE = "로그인이 필요합니다."
ADMIN_REQUIRED_MESSAGE = "관리자 권한이 필요합니다."


class APIError(HTTPException):
    """Base API error with consistent structure"""

    def __init__(
        self,
        status_code: int,
        detail: str,
        error_code: Optional[str] = None,
        headers: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(status_code=status_code, detail=detail, headers=headers)
        self.error_code = error_code

    def __str__(self) -> str:
        return str(self.detail)


class ValidationError(APIError):
    """Bad or missing input; always a client fault"""

    def __init__(
        self, detail: str = "Validation failed", error_code: str = "VALIDATION_ERROR"
    ):
        super().__init__(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=detail,
            error_code=error_code,
        )


class MissingArgumentError(ValidationError):
    """A required argument was null"""

    def __init__(self, detail: str = NULL_ARGUMENT_MESSAGE):
        super().__init__(detail=detail, error_code="NULL_ARGUMENT")


class NotFoundError(APIError):
    """Resource not found error"""

    def __init__(
        self, detail: str = "Resource not found", error_code: str = "NOT_FOUND"
    ):
        super().__init__(
            status_code=status.HTTP_404_NOT_FOUND, detail=detail, error_code=error_code
        )


class AuthenticationError(APIError):
    """No session, or the session could not be verified"""

    def __init__(
        self, detail: str = NOT_LOGGED_IN_MESSAGE, error_code: str = "AUTH_FAILED"
    ):
        super().__init__(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=detail,
            error_code=error_code,
        )


class AuthorizationError(APIError):
    """Caller is authenticated but lacks the required role"""

    def __init__(
        self, detail: str = ADMIN_REQUIRED_MESSAGE, error_code: str = "PERMISSION_DENIED"
    ):
        super().__init__(
            status_code=status.HTTP_403_FORBIDDEN, detail=detail, error_code=error_code
        )


class ConflictError(APIError):
    """Resource conflict error"""

    def __init__(self, detail: str = "Resource conflict", error_code: str = "CONFLICT"):
        super().__init__(
            status_code=status.HTTP_409_CONFLICT, detail=detail, error_code=error_code
        )


def error_response(status_code: int, message: str, headers=None) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"errorMessage": message},
        headers=headers,
    )


async def handle_api_error(request: Request, exc: APIError) -> JSONResponse:
    """Handle custom API errors"""
    logger.warning(
        f"{exc.__class__.__name__} at {request.url.path}: {exc.detail}",
        extra={"error_code": exc.error_code},
    )
    return error_response(exc.status_code, str(exc.detail), headers=exc.headers)


async def handle_http_exception(
    request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    """Reshape framework-raised HTTP errors (unknown route, wrong method)"""
    return error_response(
        exc.status_code, str(exc.detail), headers=getattr(exc, "headers", None)
    )


async def handle_value_error(request: Request, exc: ValueError) -> JSONResponse:
    """Convert ValueError to a 400 carrying its message"""
    logger.warning(f"ValueError at {request.url.path}: {str(exc)}")
    return error_response(status.HTTP_400_BAD_REQUEST, str(exc))


async def handle_request_validation_error(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """
    Convert request body/path validation failures to 400.

    Missing or null fields share one fixed message; any other problem reports
    the first validation message.
    """
    errors = exc.errors()
    logger.warning(f"Request validation failed at {request.url.path}: {errors}")

    if any(_is_null_argument(error) for error in errors):
        return error_response(status.HTTP_400_BAD_REQUEST, NULL_ARGUMENT_MESSAGE)

    message = errors[0].get("msg", "Invalid request") if errors else "Invalid request"
    return error_response(status.HTTP_400_BAD_REQUEST, message)


def _is_null_argument(error: dict) -> bool:
    return error.get("type") == "missing" or (
        "input" in error and error["input"] is None
    )


async def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
    """Last resort: log internally, never leak the internal message"""
    logger.error(
        f"Unexpected error at {request.url.path}: {exc!r}",
        exc_info=(type(exc), exc, exc.__traceback__),
    )
    return error_response(
        status.HTTP_500_INTERNAL_SERVER_ERROR, UNEXPECTED_ERROR_MESSAGE
    )


def register_exception_handlers(app):
    """Register all exception handlers with the FastAPI app"""
    app.add_exception_handler(APIError, handle_api_error)
    app.add_exception_handler(StarletteHTTPException, handle_http_exception)
    app.add_exception_handler(RequestValidationError, handle_request_validation_error)
    app.add_exception_handler(ValueError, handle_value_error)
    app.add_exception_handler(Exception, handle_unexpected_error)
