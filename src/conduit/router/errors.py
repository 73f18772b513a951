"""HTTP errors and their conversion to responses.

Handlers and middleware signal client faults and redirects by raising one of
the errors below. The router catches them once, at its entry point, and turns
them into responses with ``error_to_response``:

```python
if user is None:
    raise NotFoundError("User not found")

raise RedirectError("/admin/login", headers={"Set-Cookie": cookie})
```
"""

import traceback
from typing import Any

from fastapi.responses import JSONResponse, Response


class HttpError(Exception):
    """Base HTTP error carrying a status code, extra headers and a machine-readable code."""

    def __init__(self, message: str, status_code: int, headers: dict[str, str] | None = None, code: str | None = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.headers = dict(headers or {})
        self.code = code

    def extras(self) -> dict[str, Any]:
        """Additional fields merged into the JSON error body."""
        return {}


class BadRequestError(HttpError):
    """400 Bad Request."""

    def __init__(self, message: str, details: Any = None, headers: dict[str, str] | None = None):
        super().__init__(message, 400, headers, "BAD_REQUEST")
        self.details = details

    def extras(self) -> dict[str, Any]:
        return {"details": self.details} if self.details is not None else {}


class UnauthorizedError(HttpError):
    """401 Unauthorized."""

    def __init__(self, message: str = "Unauthorized", headers: dict[str, str] | None = None):
        super().__init__(message, 401, headers, "UNAUTHORIZED")


class ForbiddenError(HttpError):
    """403 Forbidden."""

    def __init__(self, message: str = "Forbidden", headers: dict[str, str] | None = None):
        super().__init__(message, 403, headers, "FORBIDDEN")


class NotFoundError(HttpError):
    """404 Not Found."""

    def __init__(self, message: str = "Not found", headers: dict[str, str] | None = None):
        super().__init__(message, 404, headers, "NOT_FOUND")


class ConflictError(HttpError):
    """409 Conflict."""

    def __init__(self, message: str, headers: dict[str, str] | None = None):
        super().__init__(message, 409, headers, "CONFLICT")


class ValidationError(HttpError):
    """422 Unprocessable Entity with per-field messages."""

    def __init__(self, message: str, errors: dict[str, list[str]], headers: dict[str, str] | None = None):
        super().__init__(message, 422, headers, "VALIDATION_ERROR")
        self.errors = errors

    def extras(self) -> dict[str, Any]:
        return {"errors": self.errors}


class TooManyRequestsError(HttpError):
    """429 Too Many Requests. ``retry_after`` (seconds) is also sent as ``Retry-After``."""

    def __init__(self, message: str = "Too many requests", retry_after: int | None = None, headers: dict[str, str] | None = None):
        all_headers = dict(headers or {})
        if retry_after is not None:
            all_headers["Retry-After"] = str(retry_after)
        super().__init__(message, 429, all_headers, "TOO_MANY_REQUESTS")
        self.retry_after = retry_after

    def extras(self) -> dict[str, Any]:
        return {"retry_after": self.retry_after} if self.retry_after is not None else {}


class InternalServerError(HttpError):
    """500 Internal Server Error raised on purpose by application code."""

    def __init__(self, message: str = "Internal server error", headers: dict[str, str] | None = None):
        super().__init__(message, 500, headers, "INTERNAL_SERVER_ERROR")


class RedirectError(HttpError):
    """Control-flow signal: stop and answer with a 3xx ``Location`` response.

    Extra headers (a ``Set-Cookie`` for instance) are kept on the response.
    """

    def __init__(self, location: str, status: int = 302, headers: dict[str, str] | None = None):
        super().__init__("Redirect", status, {**(headers or {}), "Location": location})
        self.location = location


def _format_stack(exc: BaseException) -> str:
    return "".join(traceback.format_exception(type(exc), exc, exc.__traceback__))


def error_to_response(exc: BaseException, development: bool = False) -> Response:
    """Convert an exception into an HTTP response.

    Messages of ``HttpError`` instances are intentional and always shown.
    Any other exception becomes a 500 whose message and stack trace are only
    exposed when ``development`` is set.

    Args:
        exc: The exception raised while handling a request
        development: Include stack traces and real messages

    Returns:
        Response: Empty redirect response or JSON error body
    """
    if isinstance(exc, RedirectError):
        return Response(status_code=exc.status_code, headers=exc.headers)

    if isinstance(exc, HttpError):
        error: dict[str, Any] = {"message": exc.message, "code": exc.code, **exc.extras()}
        if development:
            error["stack"] = _format_stack(exc)
        return JSONResponse({"error": error}, status_code=exc.status_code, headers=exc.headers)

    error = {
        "message": str(exc) if development else "An error occurred",
        "code": "INTERNAL_SERVER_ERROR",
    }
    if development:
        error["stack"] = _format_stack(exc)
    return JSONResponse({"error": error}, status_code=500)
