"""Response helpers for handlers.

For errors, raise one of the classes in ``conduit.router.errors`` instead of
building an error response by hand.
"""

from typing import Any

from fastapi.responses import JSONResponse, RedirectResponse, Response


def json_response(data: Any, status: int = 200, headers: dict[str, str] | None = None) -> JSONResponse:
    """Create a JSON response.

    Example:
        return json_response({"data": user}, status=201)
    """
    return JSONResponse(data, status_code=status, headers=headers)


def no_content() -> Response:
    """Create an empty 204 response."""
    return Response(status_code=204)


def redirect(location: str, status: int = 302, headers: dict[str, str] | None = None) -> RedirectResponse:
    """Create a redirect response.

    Handlers deep in a call stack should raise ``RedirectError`` instead.
    """
    return RedirectResponse(location, status_code=status, headers=headers)
