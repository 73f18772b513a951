"""User accounts and their storage backends."""

from .stores import FileUserStore, MemoryUserStore, SqlUserStore
from .types import User, UserStore, normalize_email

__all__ = ["FileUserStore", "MemoryUserStore", "SqlUserStore", "User", "UserStore", "normalize_email"]
