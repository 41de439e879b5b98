"""
Clock - source of "now" for cutoff and upcoming-match checks

Injected as a FastAPI dependency so tests can pin the time.
"""

from datetime import datetime, timezone
from typing import Protocol


class Clock(Protocol):
    def now(self) -> datetime:
        """Current time as an aware UTC datetime."""
        ...


class SystemClock:
    def now(self) -> datetime:
        return datetime.now(timezone.utc)


class FixedClock:
    """Clock frozen at a given instant."""

    def __init__(self, instant: datetime):
        self.instant = as_utc(instant)

    def now(self) -> datetime:
        return self.instant


def as_utc(value: datetime) -> datetime:
    """MongoDB hands back naive UTC datetimes; make them aware."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


_system_clock = SystemClock()


def get_clock() -> Clock:
    return _system_clock
