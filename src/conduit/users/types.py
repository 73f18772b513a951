"""User types and the user store contract."""

from abc import ABC, abstractmethod

from pydantic import BaseModel, ConfigDict, Field


def normalize_email(email: str) -> str:
    """Emails are compared case-insensitively and without surrounding whitespace."""
    return email.strip().lower()


class User(BaseModel):
    """A registered user."""

    model_config = ConfigDict(frozen=True)

    id: str
    email: str
    password_hash: str
    created_at: int = Field(description="Epoch milliseconds")


class UserStore(ABC):
    """Storage backend for users.

    Stores normalize emails on every call. ``create`` raises
    ``DuplicateUserError`` when the id or the email is already taken.
    """

    @abstractmethod
    async def create(self, user: User) -> None: ...

    @abstractmethod
    async def find_by_email(self, email: str) -> User | None: ...

    @abstractmethod
    async def find_by_id(self, user_id: str) -> User | None: ...

    async def exists(self, email: str) -> bool:
        return await self.find_by_email(email) is not None
