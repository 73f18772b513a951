"""SQLModel table definitions for the SQL storage backends."""

from typing import Any

from sqlalchemy import JSON, BigInteger, Column
from sqlmodel import Field, SQLModel


class EventRecord(SQLModel, table=True):
    """One row per persisted event. Rows are inserted once and never updated."""

    __tablename__ = "events"

    seq: int | None = Field(default=None, primary_key=True)
    id: str = Field(unique=True, index=True)
    timestamp: int = Field(sa_column=Column(BigInteger, index=True, nullable=False))
    type: str = Field(index=True)
    data: Any = Field(default=None, sa_column=Column(JSON))


class UserRecord(SQLModel, table=True):
    """Registered user."""

    __tablename__ = "users"

    id: str = Field(primary_key=True)
    email: str = Field(unique=True, index=True)
    password_hash: str
    created_at: int = Field(sa_column=Column(BigInteger, nullable=False))
