"""Service registry for dependency injection."""

from collections.abc import Callable
from typing import Any, TypeVar, cast

from loguru import logger

T = TypeVar("T")
ServiceFactory = Callable[[], T]


class ServiceRegistry:
    """Registry for all shared services with support for singletons and lazy factories.

    Services are keyed by type. A factory runs once, on the first ``get``,
    and its result is reused afterwards, so every service is a process-wide
    singleton. The registry is built at startup and read during requests.
    """

    def __init__(self):
        """Initialize an empty service registry."""
        self._instances: dict[str, Any] = {}
        self._factories: dict[str, ServiceFactory[Any]] = {}

    def register_singleton(self, service_type: type[T], instance: T) -> None:
        """Register a ready-made instance by its type.

        Args:
            service_type: The type of the service to register
            instance: The singleton instance to register
        """
        self._instances[service_type.__name__] = instance

    def register_factory(self, service_type: type[T], factory: ServiceFactory[T]) -> None:
        """Register a factory creating the service on first use.

        Registering replaces any instance created from an earlier registration.

        Args:
            service_type: The type of the service to register
            factory: Zero-argument callable returning the service
        """
        name = service_type.__name__
        self._factories[name] = factory
        self._instances.pop(name, None)

    def get(self, service_type: type[T]) -> T:
        """Get a service instance by type.

        Args:
            service_type: The type of the service to retrieve

        Returns:
            The shared instance of the requested service

        Raises:
            KeyError: If the requested service is not registered
        """
        name = service_type.__name__

        if name in self._instances:
            return cast(T, self._instances[name])

        if name not in self._factories:
            raise KeyError(f"Service {name} not registered")

        logger.debug(f"Creating service {name}")
        instance = self._factories[name]()
        self._instances[name] = instance
        return cast(T, instance)

    def get_if_created(self, service_type: type[T]) -> T | None:
        """Return the instance only if it already exists; never runs a factory."""
        return cast(T | None, self._instances.get(service_type.__name__))

    def has(self, service_type: type) -> bool:
        """Check whether a service is registered."""
        name = service_type.__name__
        return name in self._instances or name in self._factories

    def clear(self) -> None:
        """Forget all registrations and instances."""
        self._instances.clear()
        self._factories.clear()
