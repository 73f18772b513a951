"""File-based user store.

Layout::

    data/users/
        by-id/<user id>.json
        by-email/<quoted email>.json

Both documents hold the full user. There is no locking, so concurrent
writers for the same email can race; use the SQL store where that matters.
"""

from pathlib import Path
from urllib.parse import quote

import aiofiles
import aiofiles.os
from loguru import logger

from conduit.exceptions import DuplicateUserError
from conduit.users.types import User, UserStore, normalize_email


class FileUserStore(UserStore):
    """Stores each user as two JSON documents, one indexed by id and one by email."""

    def __init__(self, data_dir: str | Path = "data/users"):
        self.data_dir = Path(data_dir)
        self._by_id_dir = self.data_dir / "by-id"
        self._by_email_dir = self.data_dir / "by-email"

        for directory in (self.data_dir, self._by_id_dir, self._by_email_dir):
            directory.mkdir(parents=True, exist_ok=True)

    def _id_path(self, user_id: str) -> Path:
        return self._by_id_dir / f"{quote(user_id, safe='')}.json"

    def _email_path(self, email: str) -> Path:
        return self._by_email_dir / f"{quote(normalize_email(email), safe='@')}.json"

    async def create(self, user: User) -> None:
        user = user.model_copy(update={"email": normalize_email(user.email)})
        id_path = self._id_path(user.id)
        email_path = self._email_path(user.email)

        if await aiofiles.os.path.exists(id_path) or await aiofiles.os.path.exists(email_path):
            raise DuplicateUserError(user.email)

        document = user.model_dump_json(indent=2)
        for path in (id_path, email_path):
            async with aiofiles.open(path, mode="w", encoding="utf-8") as f:
                await f.write(document)

        logger.debug(f"User {user.id} written to {self.data_dir}")

    async def find_by_email(self, email: str) -> User | None:
        return await self._read(self._email_path(email))

    async def find_by_id(self, user_id: str) -> User | None:
        return await self._read(self._id_path(user_id))

    async def exists(self, email: str) -> bool:
        return await aiofiles.os.path.exists(self._email_path(email))

    async def _read(self, path: Path) -> User | None:
        try:
            async with aiofiles.open(path, mode="r", encoding="utf-8") as f:
                content = await f.read()
        except FileNotFoundError:
            return None

        return User.model_validate_json(content)
