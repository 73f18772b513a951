"""Utility functions for generating IDs.

Event IDs combine wall-clock time with a short random suffix. They sort
roughly by creation time but are not guaranteed to be unique under heavy
concurrency or clock skew.
"""

import secrets
import uuid

from conduit.constants import EVENT_ID_PREFIX, USER_ID_PREFIX
from conduit.utils.clock import now_ms


def generate_event_id() -> str:
    """Generate an event ID of the form ``evt_<epoch-ms>_<8 hex chars>``.

    Returns:
        A string containing the generated ID
    """
    return f"{EVENT_ID_PREFIX}{now_ms()}_{secrets.token_hex(4)}"


def generate_user_id() -> str:
    """Generate a user ID of the form ``user_<uuid4>``."""
    return f"{USER_ID_PREFIX}{uuid.uuid4()}"


def generate_session_id() -> str:
    """Generate an opaque, unguessable session ID."""
    return str(uuid.uuid4())
