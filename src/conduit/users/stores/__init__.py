from .file import FileUserStore
from .memory import MemoryUserStore
from .sql import SqlUserStore

__all__ = ["FileUserStore", "MemoryUserStore", "SqlUserStore"]
