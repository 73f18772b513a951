"""Cookie-based server-side sessions and flash messages."""

from .cookies import create_logout_cookie, create_session_cookie, get_session_id_from_request
from .service import SessionService
from .stores import MemorySessionStore
from .types import FlashMessages, Session, SessionStore

__all__ = [
    "FlashMessages",
    "MemorySessionStore",
    "Session",
    "SessionService",
    "SessionStore",
    "create_logout_cookie",
    "create_session_cookie",
    "get_session_id_from_request",
]
