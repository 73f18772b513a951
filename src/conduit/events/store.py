"""Event Store Implementation.

This module provides the EventStore class, the single gateway for emitting
domain facts. It completes events (id, timestamp), persists them through an
injected EventWriter and then fans them out to subscribed listeners.

## Key Guarantees

- **Durability before visibility**: the writer must succeed before any
  listener is notified; writer failures propagate to the emitter
- **Listener isolation**: listeners run concurrently and a failing listener
  never fails ``emit`` or prevents other listeners from running
- **At-least-once**: the store never de-duplicates by event id; listeners
  must be idempotent

## Usage

```python
from conduit.events import Event, EventStore
from conduit.events.writers import MemoryEventWriter

store = EventStore(MemoryEventWriter())
store.subscribe(UserListener(user_store))

completed = await store.emit(Event(type="user.registered", data={...}))
print(completed.id)  # evt_1733820000000_1a2b3c4d
```

"""

import asyncio
import inspect
from collections.abc import Sequence
from typing import Any

from loguru import logger

from conduit.utils.clock import now_ms
from conduit.utils.id_generator import generate_event_id

from .core import EventEmissionError, EventListener, EventWriter, ListenerRegistrationError
from .types import Event


class EventStore:
    """Append-only event store with listener fan-out.

    The listener list is mutated only at startup (``subscribe`` before
    traffic begins) and is treated as read-only while requests are served.

    Example:
        ```python
        store = EventStore(FileEventWriter("data/events"))
        store.subscribe(UserListener(user_store))
        await store.emit(UserRegisteredEvent(data=payload))
        ```
    """

    def __init__(self, writer: EventWriter) -> None:
        """Initialize a new EventStore.

        Args:
            writer: Durable backend that every emitted event is written to
        """
        self._writer = writer
        self._listeners: list[EventListener[Any]] = []
        logger.debug(f"EventStore initialized (writer={type(writer).__name__})")

    @property
    def writer(self) -> EventWriter:
        """The backend events are persisted to."""
        return self._writer

    @property
    def listeners(self) -> tuple[EventListener[Any], ...]:
        """All subscribed listeners in registration order."""
        return tuple(self._listeners)

    def subscribe(self, listener: EventListener[Any]) -> None:
        """Register a listener.

        Listeners are not de-duplicated: subscribing the same listener twice
        notifies it twice.

        Args:
            listener: Object exposing ``subscribes_to`` and an async ``handle``

        Raises:
            ListenerRegistrationError: If the listener does not satisfy the contract
        """
        subscribes_to = getattr(listener, "subscribes_to", None)
        if subscribes_to is None or isinstance(subscribes_to, str):
            raise ListenerRegistrationError(f"Listener must declare subscribes_to as a collection of event types: {listener}")

        if not callable(getattr(listener, "handle", None)):
            raise ListenerRegistrationError(f"Listener must have a callable handle method: {listener}")

        self._listeners.append(listener)
        logger.debug(f"Subscribed {type(listener).__name__} to {sorted(subscribes_to)}")

    def get_listeners(self, event_type: str) -> list[EventListener[Any]]:
        """Get the listeners subscribed to an event type, in registration order."""
        return [listener for listener in self._listeners if event_type in listener.subscribes_to]

    def get_listener_count(self, event_type: str) -> int:
        """Get the number of listeners subscribed to an event type."""
        return len(self.get_listeners(event_type))

    async def emit(self, event: Event) -> Event:
        """Complete, persist and publish an event.

        Args:
            event: Event with a type and payload. A blank ``id`` or a zero
                ``timestamp`` is assigned here.

        Returns:
            The completed event as it was persisted

        Raises:
            EventEmissionError: If the event is not an Event or has no type
            Exception: Whatever the writer raised; no listener is notified then
        """
        if not isinstance(event, Event):
            raise EventEmissionError(f"Event must be an Event instance, got: {type(event).__name__}")

        if not event.type:
            raise EventEmissionError("Event type must not be empty")

        completed = self._complete(event)

        await self._writer.write(completed)
        logger.debug(f"Persisted event {completed.id} ({completed.type})")

        await self._notify(completed, self.get_listeners(completed.type))
        return completed

    def _complete(self, event: Event) -> Event:
        """Return a copy of the event with id and timestamp filled in."""
        updates: dict[str, Any] = {}
        if not event.id:
            updates["id"] = generate_event_id()
        if not event.timestamp:
            updates["timestamp"] = now_ms()

        if not updates:
            return event
        return event.model_copy(update=updates)

    async def _notify(self, event: Event, listeners: Sequence[EventListener[Any]]) -> list[Any]:
        """Run all listeners concurrently and wait for every one of them to settle.

        Returns:
            List of results from all listeners (including exceptions)
        """
        if not listeners:
            logger.debug(f"No listeners subscribed to {event.type}")
            return []

        logger.trace(f"Notifying {len(listeners)} listeners of {event.type}")
        results = await asyncio.gather(*(self._run_listener(listener, event) for listener in listeners), return_exceptions=True)

        failed = 0
        for listener, result in zip(listeners, results, strict=True):
            if isinstance(result, BaseException):
                failed += 1
                logger.opt(exception=result).error(f"Listener {type(listener).__name__} failed for {event.type} ({event.id}): {result}")

        if failed:
            logger.warning(f"Event {event.type}: {len(results) - failed} successful, {failed} failed listeners")
        return results

    async def _run_listener(self, listener: EventListener[Any], event: Event) -> Any:
        """Invoke a single listener; sync handlers are accepted as well."""
        result = listener.handle(event)
        if inspect.isawaitable(result):
            return await result
        return result
