"""Service registry and application wiring."""

from .di import build_service_registry
from .registry import ServiceRegistry

__all__ = ["ServiceRegistry", "build_service_registry"]
