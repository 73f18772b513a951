"""Application routes."""

from conduit.admin import admin_routes
from conduit.constants import ADMIN_PREFIX
from conduit.middleware import cors, simple_logger
from conduit.router import Router, lazy
from conduit.settings import Settings


def register_routes(router: Router, settings: Settings) -> None:
    """Register global middleware and all application routes on ``router``."""
    router.use(cors())
    router.use(simple_logger())

    if settings.static_dir is not None:
        router.static(settings.static_dir)

    router.get("/", lazy("conduit.handlers.home"))
    router.get("/api/info", lazy("conduit.handlers.home"))

    router.group(ADMIN_PREFIX, admin_routes)
