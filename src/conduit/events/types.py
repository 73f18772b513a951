"""Event type definitions.

Events are immutable records of facts that happened in the system. The store
and its dispatch machinery only rely on the generic ``Event`` shape (a string
type tag plus an opaque payload), so third-party event types can be emitted
without touching this module. The closed set of core events below is what
Conduit's own listeners pattern-match on.
"""

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field

from conduit.constants import EVENT_USER_REGISTERED


class Event(BaseModel):
    """Generic event envelope.

    ``id`` and ``timestamp`` are left blank by the emitter and filled in by
    the event store.
    """

    model_config = ConfigDict(frozen=True)

    id: str = ""
    timestamp: int = Field(default=0, description="Epoch milliseconds")
    type: str
    data: Any = None


class UserRegisteredData(BaseModel):
    """Payload of ``user.registered``."""

    model_config = ConfigDict(frozen=True)

    user_id: str
    email: str
    password_hash: str
    created_at: int = Field(description="Epoch milliseconds")


class UserRegisteredEvent(Event):
    """Emitted when a new user completes registration."""

    type: Literal["user.registered"] = EVENT_USER_REGISTERED
    data: UserRegisteredData


CoreEvent = UserRegisteredEvent
