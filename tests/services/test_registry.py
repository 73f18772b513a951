"""Tests for the service registry."""

import pytest

from conduit.services.registry import ServiceRegistry


class MockService:
    """A mock service class for testing."""

    def __init__(self, value: str = "default"):
        """Initialize with a value."""
        self.value = value

    def get_value(self) -> str:
        """Get the service value."""
        return self.value


class AnotherMockService:
    """Another mock service class for testing."""

    def __init__(self, number: int = 42):
        """Initialize with a number."""
        self.number = number


class CallableService:
    def __call__(self) -> str:
        return "called"


def test_register_and_get_singleton():
    """Test registering and retrieving a singleton service."""
    registry = ServiceRegistry()
    service = MockService("singleton")
    registry.register_singleton(MockService, service)
    retrieved_service = registry.get(MockService)
    assert retrieved_service is service
    assert retrieved_service.get_value() == "singleton"


def test_callable_singleton_is_not_treated_as_factory():
    registry = ServiceRegistry()
    service = CallableService()
    registry.register_singleton(CallableService, service)

    assert registry.get(CallableService) is service


def test_factory_runs_once():
    """A factory is invoked on first use and its result reused afterwards."""
    registry = ServiceRegistry()
    calls = 0

    def factory() -> MockService:
        nonlocal calls
        calls += 1
        return MockService("factory")

    registry.register_factory(MockService, factory)
    assert calls == 0

    first = registry.get(MockService)
    second = registry.get(MockService)

    assert calls == 1
    assert first is second
    assert first.get_value() == "factory"


def test_reregistering_factory_drops_instance():
    registry = ServiceRegistry()
    registry.register_factory(MockService, lambda: MockService("old"))
    registry.get(MockService)

    registry.register_factory(MockService, lambda: MockService("new"))

    assert registry.get(MockService).get_value() == "new"


def test_get_unregistered_service():
    """Test getting an unregistered service raises KeyError."""
    registry = ServiceRegistry()
    with pytest.raises(KeyError, match="Service MockService not registered"):
        registry.get(MockService)


def test_get_if_created_never_runs_factory():
    registry = ServiceRegistry()
    registry.register_factory(MockService, MockService)

    assert registry.get_if_created(MockService) is None
    created = registry.get(MockService)
    assert registry.get_if_created(MockService) is created


def test_has_and_clear():
    registry = ServiceRegistry()
    registry.register_singleton(MockService, MockService())
    registry.register_factory(AnotherMockService, AnotherMockService)

    assert registry.has(MockService)
    assert registry.has(AnotherMockService)

    registry.clear()

    assert not registry.has(MockService)
    assert not registry.has(AnotherMockService)


def test_multiple_services():
    """Test registering and retrieving multiple services."""
    registry = ServiceRegistry()
    service1 = MockService("first")

    registry.register_singleton(MockService, service1)
    registry.register_factory(AnotherMockService, lambda: AnotherMockService(100))

    assert registry.get(MockService) is service1
    assert registry.get(AnotherMockService).number == 100
