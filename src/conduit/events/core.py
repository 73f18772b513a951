"""Core event sourcing contracts.

This module contains the fundamental abstractions for the event store.
They are framework-agnostic and can be used in any async Python application.

## Key Components

- **EventWriter**: Write-only, durable persistence backend for events
- **EventListener**: Base class for idempotent event listeners
- **EventBusError**: Base exception for all event related errors
- **ListenerRegistrationError**: Raised when listener registration fails
- **EventEmissionError**: Raised when an event cannot be emitted

## Usage Example

```python
from conduit.events.core import EventListener
from conduit.events.types import Event

class AuditListener(EventListener[Event]):
    subscribes_to = frozenset({"user.registered"})

    def __init__(self, audit_log: AuditLog):
        self.audit_log = audit_log

    async def handle(self, event: Event) -> None:
        if await self.audit_log.contains(event.id):
            return
        await self.audit_log.append(event)
```

The writer interface is deliberately write-only: each listener decides how
it reads events (notification from the store, tailing a log, a stream
consumer, ...).

"""

from abc import ABC, abstractmethod
from typing import Any, ClassVar, Generic, TypeVar

from conduit.events.types import Event


class EventWriter(ABC):
    """Durable, append-only event persistence backend.

    Implementations must persist the event before ``write`` returns, must
    treat each call atomically and must never silently drop data: any
    failure is raised to the caller.
    """

    @abstractmethod
    async def write(self, event: Event) -> None:
        """Append one completed event to the durable log."""


T_Event = TypeVar("T_Event", bound=Event)


class EventListener(ABC, Generic[T_Event]):
    """Base class for event listeners.

    Listeners declare the event types they react to in ``subscribes_to`` and
    implement ``handle``. Delivery is at-least-once, so ``handle`` must be
    safe to invoke more than once for the same event id (check before write).

    Dependencies are passed to the constructor when the listener is wired
    into the event store at startup.
    """

    subscribes_to: ClassVar[frozenset[str]] = frozenset()

    @abstractmethod
    async def handle(self, event: T_Event) -> Any:
        """Handle the event.

        Args:
            event: The completed event. ``id`` and ``timestamp`` are always set.

        Raises:
            Any exception that occurs during handling. Exceptions are caught
            and logged by the event store; they never reach the emitter.
        """

    def __call__(self, event: T_Event) -> Any:
        """Make the listener callable."""
        return self.handle(event)


class EventBusError(Exception):
    """Base exception for all event related errors.

    Use this for catching any event store error:
        ```python
        try:
            await store.emit(event)
        except EventBusError as e:
            logger.error(f"Event error: {e}")
        ```
    """


class ListenerRegistrationError(EventBusError):
    """Raised when listener registration fails.

    This occurs when:
    - The listener has no ``subscribes_to`` collection
    - The listener has no callable ``handle``
    """


class EventEmissionError(EventBusError):
    """Raised when an event is rejected before persistence.

    This occurs when:
    - The event is not an ``Event`` instance
    - The event has an empty type
    """
