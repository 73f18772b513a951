"""Helpers shared by the admin handlers."""

from conduit.router import RedirectError
from conduit.session import Session, create_session_cookie


def safe_return_path(value: object) -> str | None:
    """Accept only local absolute paths as post-login redirect targets."""
    if not isinstance(value, str) or not value.startswith("/") or value.startswith("//"):
        return None
    return value


def redirect_with_session(location: str, session: Session) -> RedirectError:
    """Build a redirect that also sets the session cookie (for flash messages)."""
    return RedirectError(location, headers={"Set-Cookie": create_session_cookie(session)})
