"""Time helpers.

All persisted timestamps in Conduit are integer milliseconds since the epoch.
"""

import arrow


def now_ms() -> int:
    """Return the current UTC time in epoch milliseconds."""
    return int(arrow.utcnow().float_timestamp * 1000)


def local_date(timestamp_ms: int) -> str:
    """Return the local calendar date (``YYYY-MM-DD``) of an epoch-ms timestamp."""
    return arrow.get(timestamp_ms / 1000).to("local").format("YYYY-MM-DD")
