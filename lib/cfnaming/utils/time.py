"""Time helpers."""

from __future__ import annotations

from datetime import datetime, timezone


def epoch_millis() -> int:
    """Return the current UTC time as milliseconds since the epoch."""
    return int(datetime.now(timezone.utc).timestamp() * 1000)
