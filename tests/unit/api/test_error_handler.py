"""Unit tests for API error types and rendering."""

import asyncio
import json
from unittest.mock import MagicMock

from api.middleware.error_handler import (
    APIError,
    ForbiddenError,
    InvalidSettingsError,
    NotFoundError,
    UnauthorizedError,
    error_handler,
)


def render(exc):
    request = MagicMock()
    request.method = "GET"
    request.url.path = "/api/v1/test"
    response = asyncio.run(error_handler(request, exc))
    return response.status_code, json.loads(response.body)


class TestErrorTypes:
    """Tests for status codes and defaults."""

    def test_defaults(self):
        assert UnauthorizedError().status_code == 401
        assert ForbiddenError().status_code == 403
        assert NotFoundError().message == "Not found"
        assert APIError("boom").status_code == 500

    def test_explicit_status(self):
        assert APIError("teapot", status_code=418).status_code == 418

    def test_invalid_settings_carries_errors(self):
        exc = InvalidSettingsError(["missing field 'watchlist'"])
        assert exc.status_code == 422
        assert exc.detail == {"errors": ["missing field 'watchlist'"]}


class TestErrorHandler:
    """Tests for JSON rendering."""

    def test_api_error(self):
        status, body = render(ForbiddenError("Not a member", detail={"workspace_id": "w1"}))
        assert status == 403
        assert body == {
            "error": "ForbiddenError",
            "message": "Not a member",
            "detail": {"workspace_id": "w1"},
        }

    def test_unexpected_error_hides_details(self):
        status, body = render(RuntimeError("secret connection string"))
        assert status == 500
        assert body["error"] == "InternalServerError"
        assert "secret" not in body["message"]
