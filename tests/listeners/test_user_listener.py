"""Tests for the user listener."""

import pytest

from conduit.events import Event, EventStore, UserRegisteredData, UserRegisteredEvent, register_event_listeners
from conduit.events.writers import MemoryEventWriter
from conduit.listeners import UserListener
from conduit.users import MemoryUserStore


def registration(user_id: str = "user_1", email: str = "new@example.com", event_id: str = "evt_1") -> UserRegisteredEvent:
    return UserRegisteredEvent(
        id=event_id,
        timestamp=1,
        data=UserRegisteredData(user_id=user_id, email=email, password_hash="hash", created_at=1),
    )


class TestUserListener:
    def test_subscribes_to_user_registered(self):
        assert UserListener(MemoryUserStore()).subscribes_to == frozenset({"user.registered"})

    @pytest.mark.asyncio
    async def test_creates_user(self):
        store = MemoryUserStore()

        await UserListener(store).handle(registration())

        user = await store.find_by_email("new@example.com")
        assert user is not None
        assert user.id == "user_1"
        assert user.password_hash == "hash"

    @pytest.mark.asyncio
    async def test_replayed_event_is_skipped(self):
        store = MemoryUserStore()
        listener = UserListener(store)

        await listener.handle(registration())
        await listener.handle(registration())

        assert len(store) == 1

    @pytest.mark.asyncio
    async def test_existing_email_is_skipped(self):
        store = MemoryUserStore()
        listener = UserListener(store)

        await listener.handle(registration())
        await listener.handle(registration(user_id="user_2", event_id="evt_2"))

        assert len(store) == 1
        assert await store.find_by_id("user_2") is None

    @pytest.mark.asyncio
    async def test_accepts_generic_event_payload(self):
        store = MemoryUserStore()
        event = Event(
            id="evt_1",
            timestamp=1,
            type="user.registered",
            data={"user_id": "user_1", "email": "raw@example.com", "password_hash": "hash", "created_at": 1},
        )

        await UserListener(store).handle(event)  # type: ignore[arg-type]

        assert await store.exists("raw@example.com")

    @pytest.mark.asyncio
    async def test_wired_through_event_store(self):
        store = MemoryUserStore()
        event_store = EventStore(MemoryEventWriter())
        register_event_listeners(event_store, store)

        await event_store.emit(registration(event_id=""))

        assert event_store.get_listener_count("user.registered") == 1
        assert await store.exists("new@example.com")
