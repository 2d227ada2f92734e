"""API middleware."""

from api.middleware.logging import RequestLoggingMiddleware
from api.middleware.error_handler import (
    APIError,
    ErrorHandlerMiddleware,
    ForbiddenError,
    InvalidSettingsError,
    NotFoundError,
    UnauthorizedError,
    error_handler,
)

__all__ = [
    "RequestLoggingMiddleware",
    "ErrorHandlerMiddleware",
    "error_handler",
    "APIError",
    "ForbiddenError",
    "InvalidSettingsError",
    "NotFoundError",
    "UnauthorizedError",
]
