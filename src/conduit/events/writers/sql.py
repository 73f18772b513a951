"""SQL event writer.

Persists each event as one row of the ``events`` table. The insert is
committed before ``write`` returns, so a successful write is durable.
"""

import asyncio

from loguru import logger
from sqlalchemy import Engine

from conduit.database import borrow_db_session
from conduit.database.models import EventRecord
from conduit.events.core import EventWriter
from conduit.events.types import Event


class SqlEventWriter(EventWriter):
    """Insert events into a relational database through SQLModel."""

    def __init__(self, engine: Engine) -> None:
        self._engine = engine

    async def write(self, event: Event) -> None:
        await asyncio.to_thread(self._insert, event)

    def _insert(self, event: Event) -> None:
        payload = event.model_dump(mode="json")
        record = EventRecord(id=payload["id"], timestamp=payload["timestamp"], type=payload["type"], data=payload["data"])

        with borrow_db_session(self._engine) as session:
            session.add(record)
            session.commit()

        logger.trace(f"Event {event.id} inserted into events table")
