"""
GymPass Backend — Time Helpers
===============================

Services take a `Clock` (a zero-argument callable returning an aware
datetime) so tests can pin "now". Calendar-day rules use the UTC date.
"""

from datetime import date, datetime, timezone
from typing import Callable

Clock = Callable[[], datetime]


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def as_utc(value: datetime) -> datetime:
    """Normalize to an aware UTC datetime (naive input is taken as UTC)."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def utc_date(value: datetime) -> date:
    """The UTC calendar day a timestamp falls on."""
    return as_utc(value).date()
