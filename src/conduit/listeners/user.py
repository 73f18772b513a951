"""User listener.

Keeps the user store in sync with ``user.registered`` events. The store
notifies it directly after each write; a deployment reading events from
another source (tailing the JSONL files, a database table) can drive the same
``handle`` method.
"""

from loguru import logger

from conduit.constants import EVENT_USER_REGISTERED
from conduit.events.core import EventListener
from conduit.events.types import UserRegisteredData, UserRegisteredEvent
from conduit.users.types import User, UserStore


class UserListener(EventListener[UserRegisteredEvent]):
    """Create one user per ``user.registered`` event. Replays are skipped."""

    subscribes_to = frozenset({EVENT_USER_REGISTERED})

    def __init__(self, user_store: UserStore):
        self.user_store = user_store

    async def handle(self, event: UserRegisteredEvent) -> None:
        data = UserRegisteredData.model_validate(event.data)

        if await self.user_store.find_by_id(data.user_id) is not None:
            logger.debug(f"User {data.user_id} already exists, skipping event {event.id}")
            return

        if await self.user_store.exists(data.email):
            logger.warning(f"Email {data.email} already registered, skipping event {event.id}")
            return

        await self.user_store.create(
            User(id=data.user_id, email=data.email, password_hash=data.password_hash, created_at=data.created_at)
        )
        logger.info(f"User registered: {data.email}")
