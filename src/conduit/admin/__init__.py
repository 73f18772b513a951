"""Admin area: login, registration and dashboard."""

from .routes import ADMIN_LAYOUT, admin_routes

__all__ = ["ADMIN_LAYOUT", "admin_routes"]
