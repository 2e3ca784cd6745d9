"""
API error handling. Structured JSON errors with codes.

Every error response: {"error": {"code": "...", "message": "...", "details": {...}}}
"""

from fastapi import Request
from fastapi.responses import JSONResponse

from gitstock.github import GitHubAPIError, UserNotFound


class APIError(Exception):
    """Structured API error with HTTP status and machine-readable code."""

    def __init__(self, status: int, code: str, message: str,
                 details: dict | None = None):
        self.status = status
        self.code = code
        self.message = message
        self.details = details or {}

    def response(self) -> JSONResponse:
        return JSONResponse(
            status_code=self.status,
            content={"error": {
                "code": self.code,
                "message": self.message,
                "details": self.details,
            }},
        )


async def api_error_handler(request: Request, exc: APIError) -> JSONResponse:
    return exc.response()


def translate_fetch_error(exc: GitHubAPIError, username: str) -> APIError:
    """Missing user -> 404. Everything else upstream -> generic 500."""
    if isinstance(exc, UserNotFound):
        return APIError(404, "user_not_found", f"User not found: {username}")

    details = {}
    if exc.status_code is not None:
        details["upstream_status"] = exc.status_code
    return APIError(500, "fetch_failed", "Failed to fetch user data", details)
