"""
day index resolution.

maps wall-clock time to a stable, cycling day index. the day rolls over
exactly at the configured reset hour (UTC), no matter the caller's
timezone or DST.
"""

import re
import time
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone

MS_PER_HOUR = 60 * 60 * 1000
MS_PER_DAY = 24 * MS_PER_HOUR

DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")


@dataclass(frozen=True)
class ResetCountdown:
    hours: int
    minutes: int
    total_ms: int


def _now_ms() -> int:
    return time.time_ns() // 1_000_000


def get_current_day_index(
    now_ms: int | None = None,
    reset_hour_utc: int = 5,
    cycle_length_days: int = 365,
) -> int:
    """
    day index for an instant: floor((now - reset_hour) / day) mod cycle.

    args:
        now_ms: epoch milliseconds (default: wall clock)
        reset_hour_utc: hour of day (UTC) at which the index increments
        cycle_length_days: index wraps around after this many days

    returns:
        day index in [0, cycle_length_days)
    """
    if now_ms is None:
        now_ms = _now_ms()

    shifted = now_ms - reset_hour_utc * MS_PER_HOUR
    raw_index = shifted // MS_PER_DAY

    # python's % is already non-negative for a positive modulus,
    # so raw indices before the epoch wrap correctly
    return raw_index % cycle_length_days


def _as_utc(now: datetime | None) -> datetime:
    if now is None:
        return datetime.now(timezone.utc)
    if now.tzinfo is None:
        # naive datetimes are taken to be UTC
        return now.replace(tzinfo=timezone.utc)
    return now.astimezone(timezone.utc)


def next_reset_time(now: datetime | None = None, reset_hour_utc: int = 5) -> datetime:
    """first UTC instant strictly after `now` at the reset hour."""
    now = _as_utc(now)
    candidate = now.replace(hour=reset_hour_utc, minute=0, second=0, microsecond=0)
    if candidate <= now:
        candidate += timedelta(days=1)
    return candidate


def time_until_reset(now: datetime | None = None, reset_hour_utc: int = 5) -> ResetCountdown:
    """countdown to the next reset (for display purposes)."""
    now = _as_utc(now)
    diff = next_reset_time(now, reset_hour_utc) - now
    total_ms = int(diff.total_seconds() * 1000)

    hours = total_ms // MS_PER_HOUR
    minutes = (total_ms % MS_PER_HOUR) // (60 * 1000)
    return ResetCountdown(hours=hours, minutes=minutes, total_ms=total_ms)


def challenge_date(now: datetime | None = None, reset_hour_utc: int = 5) -> str:
    """
    YYYY-MM-DD of the game day `now` belongs to.

    before the reset hour we are still on the previous day's challenge.
    """
    now = _as_utc(now)
    return (now - timedelta(hours=reset_hour_utc)).strftime("%Y-%m-%d")


def day_index_for_date(date_str: str, cycle_length_days: int = 365) -> int:
    """
    day index for a calendar date (for testing/admin).

    counts whole days from 1970-01-01 to `date_str` at 00:00 UTC,
    ignoring the reset hour.
    """
    if not DATE_RE.match(date_str):
        raise ValueError(f"date must be YYYY-MM-DD, got: {date_str}")

    target = datetime.strptime(date_str, "%Y-%m-%d").replace(tzinfo=timezone.utc)
    epoch = datetime(1970, 1, 1, tzinfo=timezone.utc)
    return (target - epoch).days % cycle_length_days
