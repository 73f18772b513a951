"""Session data types and the session store contract."""

from abc import ABC, abstractmethod

from pydantic import BaseModel, Field


class FlashMessages(BaseModel):
    """One-time messages shown on the next page view."""

    error: str | None = None
    success: str | None = None
    info: str | None = None
    errors: dict[str, list[str]] | None = Field(default=None, description="Messages per form field")


class Session(BaseModel):
    """A server-side session. Anonymous sessions (flash only) have an empty ``user_id``."""

    id: str
    user_id: str
    created_at: int = Field(description="Epoch milliseconds")
    expires_at: int = Field(description="Epoch milliseconds")
    flash: FlashMessages | None = None

    @property
    def is_authenticated(self) -> bool:
        return bool(self.user_id)


class SessionStore(ABC):
    """Storage backend for sessions.

    ``get`` must return None for unknown or expired sessions.
    """

    @abstractmethod
    async def get(self, session_id: str) -> Session | None: ...

    @abstractmethod
    async def set(self, session: Session) -> None: ...

    @abstractmethod
    async def delete(self, session_id: str) -> None: ...
