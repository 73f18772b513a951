"""In-memory session store.

Sessions are lost on restart and are not shared between processes; use it
for development and tests.
"""

from loguru import logger

from conduit.session.types import Session, SessionStore
from conduit.utils.clock import now_ms


class MemorySessionStore(SessionStore):
    """Keeps sessions in a dict. Expired sessions are deleted when read."""

    def __init__(self) -> None:
        self._sessions: dict[str, Session] = {}

    async def get(self, session_id: str) -> Session | None:
        session = self._sessions.get(session_id)
        if session is None:
            return None

        if session.expires_at < now_ms():
            logger.debug(f"Session {session_id} expired")
            await self.delete(session_id)
            return None

        return session.model_copy(deep=True)

    async def set(self, session: Session) -> None:
        self._sessions[session.id] = session.model_copy(deep=True)

    async def delete(self, session_id: str) -> None:
        self._sessions.pop(session_id, None)

    def __len__(self) -> int:
        return len(self._sessions)
