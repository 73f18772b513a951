"""Utility functions for Conduit."""

from conduit.utils.clock import local_date, now_ms
from conduit.utils.id_generator import generate_event_id, generate_session_id, generate_user_id

__all__ = [
    "generate_event_id",
    "generate_session_id",
    "generate_user_id",
    "local_date",
    "now_ms",
]
