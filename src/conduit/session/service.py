"""Session service.

Wraps a ``SessionStore`` with session lifecycle and flash message helpers.
Flash messages set without an existing session create a short-lived
anonymous session, so they survive the redirect that usually follows.
"""

from fastapi import Request
from loguru import logger

from conduit.constants import FLASH_SESSION_TTL_SECONDS, SESSION_TTL_SECONDS
from conduit.session.cookies import get_session_id_from_request
from conduit.session.types import FlashMessages, Session, SessionStore
from conduit.utils.clock import now_ms
from conduit.utils.id_generator import generate_session_id


class SessionService:
    """Create, read and delete sessions and their flash messages."""

    def __init__(self, store: SessionStore):
        self.store = store

    async def create_session(self, user_id: str) -> Session:
        now = now_ms()
        session = Session(id=generate_session_id(), user_id=user_id, created_at=now, expires_at=now + SESSION_TTL_SECONDS * 1000)
        await self.store.set(session)
        logger.debug(f"Created session for user {user_id}")
        return session

    async def get_session(self, session_id: str) -> Session | None:
        return await self.store.get(session_id)

    async def delete_session(self, session_id: str) -> None:
        await self.store.delete(session_id)
        logger.debug("Session deleted")

    async def get_session_from_request(self, request: Request) -> Session | None:
        """Load the session named by the request's cookie, if it exists and has not expired."""
        session_id = get_session_id_from_request(request)
        if session_id is None:
            return None
        return await self.get_session(session_id)

    async def set_flash_error(self, session_id: str | None, message: str) -> Session:
        return await self._update_flash(session_id, error=message)

    async def set_flash_errors(self, session_id: str | None, errors: dict[str, list[str]]) -> Session:
        """Store per-field messages, e.g. ``{"email": ["Email already taken"]}``."""
        return await self._update_flash(session_id, errors=errors)

    async def set_flash_success(self, session_id: str | None, message: str) -> Session:
        return await self._update_flash(session_id, success=message)

    async def set_flash_info(self, session_id: str | None, message: str) -> Session:
        return await self._update_flash(session_id, info=message)

    async def get_flash(self, session_id: str | None) -> FlashMessages | None:
        """Return the session's flash messages and clear them."""
        if not session_id:
            return None

        session = await self.get_session(session_id)
        if session is None or session.flash is None:
            return None

        flash = session.flash
        await self.store.set(session.model_copy(update={"flash": None}))
        return flash

    async def _update_flash(self, session_id: str | None, **messages) -> Session:
        session = await self.get_session(session_id) if session_id else None

        if session is None:
            now = now_ms()
            session = Session(
                id=generate_session_id(),
                user_id="",
                created_at=now,
                expires_at=now + FLASH_SESSION_TTL_SECONDS * 1000,
                flash=FlashMessages(**messages),
            )
        else:
            flash = session.flash or FlashMessages()
            session = session.model_copy(update={"flash": flash.model_copy(update=messages)})

        await self.store.set(session)
        return session
