from .memory import MemorySessionStore

__all__ = ["MemorySessionStore"]
