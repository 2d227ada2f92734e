"""Error types and the global error handler.

Services raise ``APIError`` subclasses; routers re-raise them untouched
and the handler below renders every one as ``{error, message, detail}``.
"""

import logging
from typing import Callable, List, Optional

from fastapi import Request, Response
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

logger = logging.getLogger(__name__)


class APIError(Exception):
    """Error carrying the HTTP status it should be rendered with."""

    status_code = 500
    default_message = "An unexpected error occurred"

    def __init__(
        self,
        message: Optional[str] = None,
        status_code: Optional[int] = None,
        detail: dict | None = None,
    ):
        """Initialize API error.

        Args:
            message: Error message (class default if None)
            status_code: HTTP status code (class default if None)
            detail: Additional error details
        """
        self.message = message or self.default_message
        super().__init__(self.message)
        if status_code is not None:
            self.status_code = status_code
        self.detail = detail


class UnauthorizedError(APIError):
    """Request carries no usable identity."""

    status_code = 401
    default_message = "Authentication required"


class ForbiddenError(APIError):
    """Caller may not access the resource (e.g. not a workspace member)."""

    status_code = 403
    default_message = "Access denied"


class NotFoundError(APIError):
    """Referenced user or workspace does not exist."""

    status_code = 404
    default_message = "Not found"


class InvalidSettingsError(APIError):
    """Submitted privacy settings failed strict validation."""

    status_code = 422
    default_message = "Invalid privacy settings"

    def __init__(self, errors: List[str], message: Optional[str] = None):
        super().__init__(message, detail={"errors": list(errors)})
        self.errors = list(errors)


async def error_handler(request: Request, exc: Exception) -> JSONResponse:
    """Render an exception as a JSON error response.

    Args:
        request: Request that caused the error
        exc: Exception that was raised

    Returns:
        JSON error response
    """
    if isinstance(exc, APIError):
        if exc.status_code >= 500:
            logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
        return JSONResponse(
            status_code=exc.status_code,
            content={
                "error": type(exc).__name__,
                "message": exc.message,
                "detail": exc.detail,
            },
        )

    logger.exception(f"Unhandled error in {request.method} {request.url.path}: {exc}")

    return JSONResponse(
        status_code=500,
        content={
            "error": "InternalServerError",
            "message": APIError.default_message,
            "detail": None,
        },
    )


class ErrorHandlerMiddleware(BaseHTTPMiddleware):
    """Last-resort catch for errors escaping the routers."""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        try:
            return await call_next(request)
        except Exception as exc:
            return await error_handler(request, exc)
