"""Event sourcing for Conduit.

Events are immutable facts (``user.registered``, ...) emitted through the
``EventStore``. The store persists every event through a pluggable
``EventWriter`` and then notifies the ``EventListener`` objects subscribed to
its type. Listeners are wired in one place, ``register_event_listeners``, so
storage modules never need to know about each other.
"""

from typing import TYPE_CHECKING

from loguru import logger

from conduit.events.core import EventBusError, EventEmissionError, EventListener, EventWriter, ListenerRegistrationError
from conduit.events.store import EventStore
from conduit.events.types import CoreEvent, Event, UserRegisteredData, UserRegisteredEvent

if TYPE_CHECKING:
    from conduit.users import UserStore

__all__ = [
    "CoreEvent",
    "Event",
    "EventBusError",
    "EventEmissionError",
    "EventListener",
    "EventStore",
    "EventWriter",
    "ListenerRegistrationError",
    "UserRegisteredData",
    "UserRegisteredEvent",
    "register_event_listeners",
]


def register_event_listeners(event_store: EventStore, user_store: "UserStore") -> None:
    """Subscribe every application listener to the event store.

    Called once at startup, before traffic begins.

    Args:
        event_store: The application's event store
        user_store: User store the user listener writes to
    """
    from conduit.listeners.user import UserListener

    logger.debug("Registering event listeners in event store")

    event_store.subscribe(UserListener(user_store))

    logger.info(f"Event listeners registered: {', '.join(type(listener).__name__ for listener in event_store.listeners)}")
