"""Event writer backends.

Each backend implements ``EventWriter`` for a different storage medium.
Pick one in configuration (``CONDUIT_EVENT_WRITER``); the event store does
not care which one it is given.
"""

from .file import FileEventWriter
from .memory import MemoryEventWriter
from .sql import SqlEventWriter

__all__ = [
    "FileEventWriter",
    "MemoryEventWriter",
    "SqlEventWriter",
]
