"""SQL user store backed by the ``users`` table."""

import asyncio

from sqlalchemy import Engine
from sqlalchemy.exc import IntegrityError
from sqlmodel import select

from conduit.database import borrow_db_session
from conduit.database.models import UserRecord
from conduit.exceptions import DuplicateUserError
from conduit.users.types import User, UserStore, normalize_email


def _to_user(record: UserRecord | None) -> User | None:
    if record is None:
        return None
    return User(id=record.id, email=record.email, password_hash=record.password_hash, created_at=record.created_at)


class SqlUserStore(UserStore):
    """Database access runs in worker threads so the event loop is never blocked."""

    def __init__(self, engine: Engine):
        self._engine = engine

    async def create(self, user: User) -> None:
        await asyncio.to_thread(self._create, user)

    async def find_by_email(self, email: str) -> User | None:
        return await asyncio.to_thread(self._find_by_email, normalize_email(email))

    async def find_by_id(self, user_id: str) -> User | None:
        return await asyncio.to_thread(self._find_by_id, user_id)

    def _create(self, user: User) -> None:
        email = normalize_email(user.email)
        record = UserRecord(id=user.id, email=email, password_hash=user.password_hash, created_at=user.created_at)

        try:
            with borrow_db_session(self._engine) as session:
                session.add(record)
                session.commit()
        except IntegrityError as e:
            raise DuplicateUserError(email) from e

    def _find_by_email(self, email: str) -> User | None:
        with borrow_db_session(self._engine) as session:
            return _to_user(session.exec(select(UserRecord).where(UserRecord.email == email)).first())

    def _find_by_id(self, user_id: str) -> User | None:
        with borrow_db_session(self._engine) as session:
            return _to_user(session.get(UserRecord, user_id))
