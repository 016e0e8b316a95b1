"""Time Utilities for UTC management"""

import math
from datetime import datetime, timezone
from typing import Optional

SECONDS_PER_DAY = 24 * 60 * 60


def get_utc_now() -> datetime:
    """
    Returns a naive UTC datetime.
    Matches the DB schema (TIMESTAMP WITHOUT TIME ZONE).
    """
    return datetime.now(timezone.utc).replace(tzinfo=None)


def to_naive_utc(value: datetime) -> datetime:
    """Normalize an aware datetime to naive UTC; naive values are assumed UTC."""
    if value.tzinfo is not None:
        return value.astimezone(timezone.utc).replace(tzinfo=None)
    return value


def days_until(target: datetime, now: Optional[datetime] = None) -> int:
    """Whole days from ``now`` to ``target``, rounded up (negative when past)."""
    now = to_naive_utc(now) if now is not None else get_utc_now()
    delta = to_naive_utc(target) - now
    return math.ceil(delta.total_seconds() / SECONDS_PER_DAY)


def epoch_millis(value: Optional[datetime] = None) -> int:
    """Milliseconds since the Unix epoch for a naive UTC datetime."""
    value = value or get_utc_now()
    return int(value.replace(tzinfo=timezone.utc).timestamp() * 1000)
