"""File-based event writer.

Structure::

    data/events/
      2025-12-10.jsonl   <- today's events (append-only)
      2025-12-09.jsonl

Each line is one complete JSON event. Files are partitioned by the local
calendar date of the event timestamp.

There is no locking across processes, so concurrent writers from several
processes may interleave lines. Use the SQL backend when that matters.
"""

from pathlib import Path

import aiofiles
from loguru import logger

from conduit.events.core import EventWriter
from conduit.events.types import Event
from conduit.utils.clock import local_date


class FileEventWriter(EventWriter):
    """Append events as JSON Lines, one file per day."""

    def __init__(self, events_dir: str | Path = "data/events") -> None:
        self._events_dir = Path(events_dir)
        self._events_dir.mkdir(parents=True, exist_ok=True)

    @property
    def events_dir(self) -> Path:
        return self._events_dir

    def get_log_path(self, timestamp_ms: int) -> Path:
        """Return the JSONL file an event with this timestamp belongs to."""
        return self._events_dir / f"{local_date(timestamp_ms)}.jsonl"

    async def write(self, event: Event) -> None:
        path = self.get_log_path(event.timestamp)
        line = event.model_dump_json() + "\n"

        try:
            async with aiofiles.open(path, mode="a", encoding="utf-8") as f:
                await f.write(line)
                await f.flush()
        except OSError as e:
            logger.error(f"Failed to append event {event.id} to {path}: {e}")
            raise

        logger.trace(f"Event {event.id} appended to {path}")
