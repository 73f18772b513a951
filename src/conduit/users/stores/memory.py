"""In-memory user store for development and tests."""

from conduit.exceptions import DuplicateUserError
from conduit.users.types import User, UserStore, normalize_email


class MemoryUserStore(UserStore):
    def __init__(self) -> None:
        self._by_id: dict[str, User] = {}
        self._by_email: dict[str, User] = {}

    async def create(self, user: User) -> None:
        user = user.model_copy(update={"email": normalize_email(user.email)})
        if user.id in self._by_id or user.email in self._by_email:
            raise DuplicateUserError(user.email)

        self._by_id[user.id] = user
        self._by_email[user.email] = user

    async def find_by_email(self, email: str) -> User | None:
        return self._by_email.get(normalize_email(email))

    async def find_by_id(self, user_id: str) -> User | None:
        return self._by_id.get(user_id)

    async def exists(self, email: str) -> bool:
        return normalize_email(email) in self._by_email

    def __len__(self) -> int:
        return len(self._by_id)
