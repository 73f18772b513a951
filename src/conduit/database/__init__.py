"""Database package for the SQL storage backends."""

from .connection import borrow_db_session, create_db_engine, dispose_db, init_db

__all__ = [
    "borrow_db_session",
    "create_db_engine",
    "dispose_db",
    "init_db",
]
