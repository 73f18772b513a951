"""Event listeners that maintain read models from events."""

from .user import UserListener

__all__ = ["UserListener"]
