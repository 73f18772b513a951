"""Session cookie helpers."""

from fastapi import Request

from conduit.constants import SESSION_COOKIE_NAME, SESSION_TTL_SECONDS
from conduit.session.types import Session

_COOKIE_ATTRIBUTES = "HttpOnly; SameSite=Lax; Path=/"


def get_session_id_from_request(request: Request) -> str | None:
    """Read the session id from the request's ``session`` cookie."""
    return request.cookies.get(SESSION_COOKIE_NAME) or None


def create_session_cookie(session: Session) -> str:
    """Build the ``Set-Cookie`` value for a session (valid for 7 days)."""
    return f"{SESSION_COOKIE_NAME}={session.id}; {_COOKIE_ATTRIBUTES}; Max-Age={SESSION_TTL_SECONDS}"


def create_logout_cookie() -> str:
    """Build a ``Set-Cookie`` value that clears the session cookie."""
    return f"{SESSION_COOKIE_NAME}=; {_COOKIE_ATTRIBUTES}; Max-Age=0"
