"""Sources of the current time.

Schedules are expressed in one local wall-clock timezone, so phase decisions
compare naive local datetimes. Clocks return the current instant and are
injected, so every evaluation reads a fresh ``now``.
"""

from datetime import UTC, datetime, tzinfo
from typing import Protocol


class Clock(Protocol):
    def now(self) -> datetime:
        """Return the current instant."""
        ...


class SystemClock:
    def now(self) -> datetime:
        return datetime.now(UTC)


class FixedClock:
    """Clock frozen at a given instant, for tests and replays."""

    def __init__(self, now: datetime) -> None:
        self._now = now

    def now(self) -> datetime:
        return self._now

    def advance_to(self, now: datetime) -> None:
        self._now = now


def to_wall_clock(value: datetime, tz: tzinfo) -> datetime:
    """Convert an aware datetime to naive local time; naive ones pass through."""
    if value.tzinfo is None:
        return value
    return value.astimezone(tz).replace(tzinfo=None)
