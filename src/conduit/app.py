"""Main FastAPI application module.

The FastAPI app is a thin host: it owns the lifespan (logging, startup
summary, resource disposal) and mounts the Conduit ``Router``, which serves
every request.
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI
from loguru import logger
from sqlalchemy import Engine

from conduit.database import dispose_db
from conduit.events import EventStore
from conduit.logging import setup_logging
from conduit.router import Router
from conduit.routes import register_routes
from conduit.services.di import build_service_registry
from conduit.settings import Settings, get_settings
from conduit.utils.version import get_version


def _log_server_endpoints_summary(settings: Settings, router: Router) -> None:
    """Log the server URL and every registered route.

    Args:
        settings: Application settings containing host and port
        router: Router holding the registered routes
    """
    server_url = f"http://{settings.host}:{settings.port}"
    logger.info(f"Server running at: {server_url}")

    logger.info("Available routes:")
    for route in router.routes:
        logger.info(f"   {route.method:<6} {server_url}{route.pattern}")

    if settings.static_dir is not None:
        logger.info(f"Static files: {settings.static_dir}")
    logger.info(f"Storage: event_writer={settings.event_writer}, user_store={settings.user_store}")


def create_app(settings: Settings | None = None) -> FastAPI:
    """Build the application for the given settings.

    Args:
        settings: Application settings; the cached environment settings by default

    Returns:
        FastAPI app with the Conduit router mounted at ``/``
    """
    settings = settings or get_settings()
    registry = build_service_registry(settings)
    router = Router(services=registry, development=settings.debug)
    register_routes(router, settings)

    @asynccontextmanager
    async def app_lifespan(_app: FastAPI):
        """Handle startup and shutdown events for the application."""
        setup_logging(settings.log_level, sql_log=settings.sql_log)

        logger.info("Conduit starting up")

        # Subscribe listeners before the first request arrives
        registry.get(EventStore)

        _log_server_endpoints_summary(settings, router)

        yield

        logger.info("Conduit shutting down")
        dispose_db(registry.get_if_created(Engine))

    app = FastAPI(
        lifespan=app_lifespan,
        title="Conduit",
        description="Event-sourced web backend with a middleware router",
        version=get_version().version,
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
    )
    app.state.settings = settings  # type: ignore[attr-defined]
    app.state.services = registry  # type: ignore[attr-defined]
    app.state.router = router  # type: ignore[attr-defined]

    app.mount("/", router)
    return app
