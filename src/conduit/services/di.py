"""Dependency injection setup module.

Builds the ``ServiceRegistry`` for one application instance from settings.
Backends are chosen here and nowhere else; handlers and middleware resolve
them by their abstract type (``UserStore``, ``EventWriter``, ...).
"""

from loguru import logger
from sqlalchemy import Engine

from conduit.database import create_db_engine, init_db
from conduit.events import EventStore, EventWriter, register_event_listeners
from conduit.events.writers import FileEventWriter, MemoryEventWriter, SqlEventWriter
from conduit.exceptions import ConfigurationError
from conduit.services.registry import ServiceRegistry
from conduit.session import MemorySessionStore, SessionService, SessionStore
from conduit.settings import Settings
from conduit.users import FileUserStore, MemoryUserStore, SqlUserStore, UserStore


def _create_engine(settings: Settings) -> Engine:
    if not settings.database_url:
        settings.data_dir.mkdir(parents=True, exist_ok=True)

    engine = create_db_engine(settings.resolved_database_url(), echo=settings.sql_log)
    init_db(engine)
    return engine


def _create_event_writer(settings: Settings, registry: ServiceRegistry) -> EventWriter:
    match settings.event_writer:
        case "file":
            return FileEventWriter(settings.data_dir / "events")
        case "memory":
            return MemoryEventWriter()
        case "sql":
            return SqlEventWriter(registry.get(Engine))
    raise ConfigurationError(f"Unknown event writer backend: {settings.event_writer}")


def _create_user_store(settings: Settings, registry: ServiceRegistry) -> UserStore:
    match settings.user_store:
        case "file":
            return FileUserStore(settings.data_dir / "users")
        case "memory":
            return MemoryUserStore()
        case "sql":
            return SqlUserStore(registry.get(Engine))
    raise ConfigurationError(f"Unknown user store backend: {settings.user_store}")


def _create_event_store(registry: ServiceRegistry) -> EventStore:
    event_store = EventStore(registry.get(EventWriter))
    register_event_listeners(event_store, registry.get(UserStore))
    return event_store


def register_storage_services(registry: ServiceRegistry, settings: Settings) -> None:
    """Register the storage backends selected in settings.

    Args:
        registry: Service registry instance to register services in
        settings: Application settings naming the backends
    """
    logger.debug(f"Registering storage services (event_writer={settings.event_writer}, user_store={settings.user_store})")

    registry.register_factory(Engine, lambda: _create_engine(settings))
    registry.register_factory(EventWriter, lambda: _create_event_writer(settings, registry))
    registry.register_factory(UserStore, lambda: _create_user_store(settings, registry))
    registry.register_factory(SessionStore, MemorySessionStore)


def register_app_services(registry: ServiceRegistry) -> None:
    """Register the services handlers use directly.

    Args:
        registry: Service registry instance to register services in
    """
    logger.debug("Registering application services in DI container")

    registry.register_factory(SessionService, lambda: SessionService(registry.get(SessionStore)))
    registry.register_factory(EventStore, lambda: _create_event_store(registry))


def build_service_registry(settings: Settings) -> ServiceRegistry:
    """Create a registry holding every service of one application instance.

    Args:
        settings: Application settings

    Returns:
        A registry whose services are created lazily on first use
    """
    registry = ServiceRegistry()
    registry.register_singleton(Settings, settings)
    register_storage_services(registry, settings)
    register_app_services(registry)
    return registry
