"""Conduit: event-sourced web backend with a middleware router."""

from .settings import Settings, get_settings  # noqa: F401

__all__ = ["get_settings", "Settings"]
