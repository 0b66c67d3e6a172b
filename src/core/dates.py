"""Clock and period keys.

Every staleness check (tasks, daily earnings, monthly earnings) goes through
`current_period_key()`, so tests can pin "now" by injecting a clock.
"""

from __future__ import annotations

from datetime import datetime
from typing import Literal, Protocol
from zoneinfo import ZoneInfo

Period = Literal["day", "month"]


class Clock(Protocol):
    """Source of the current time."""

    def now(self) -> datetime: ...


class SystemClock:
    """Wall clock in the configured timezone."""

    def __init__(self, tz: str | None = None) -> None:
        if tz is None:
            from src.config import settings
            tz = settings.TIMEZONE
        self._tz = ZoneInfo(tz)

    def now(self) -> datetime:
        return datetime.now(self._tz)


class FixedClock:
    """Clock frozen at a given instant; `advance_to()` moves it."""

    def __init__(self, when: datetime) -> None:
        self._when = when

    def now(self) -> datetime:
        return self._when

    def advance_to(self, when: datetime) -> None:
        self._when = when


def day_key(dt: datetime) -> str:
    """Return the YYYY-MM-DD key for a datetime."""
    return dt.strftime("%Y-%m-%d")


def month_key(dt: datetime) -> str:
    """Return the YYYY-MM key for a datetime."""
    return dt.strftime("%Y-%m")


def current_period_key(clock: Clock, period: Period) -> str:
    now = clock.now()
    if period == "day":
        return day_key(now)
    if period == "month":
        return month_key(now)
    raise ValueError(f"Unknown period: {period!r}")
