"""In-memory event writer.

Keeps events in a process-local list. Events are lost on restart, so this
backend is meant for development and tests.
"""

from loguru import logger

from conduit.events.core import EventWriter
from conduit.events.types import Event


class MemoryEventWriter(EventWriter):
    """Append events to an in-process list."""

    def __init__(self) -> None:
        self._events: list[Event] = []

    @property
    def events(self) -> list[Event]:
        """A snapshot of all written events in write order."""
        return list(self._events)

    async def write(self, event: Event) -> None:
        self._events.append(event)
        logger.trace(f"Event {event.id} appended to memory log ({len(self._events)} total)")

    def clear(self) -> None:
        """Drop all written events."""
        self._events.clear()
