from __future__ import annotations

from datetime import date, datetime, timezone, tzinfo
from typing import Callable
from zoneinfo import ZoneInfo

from ..core.constants import DATETIME_FORMAT, TIME_FORMAT


def load_timezone(name: str) -> tzinfo:
    """Resolve an IANA zone name (e.g. ``America/Lima``)."""
    return ZoneInfo(name)


def utc_now() -> datetime:
    """Current instant.

    Note: Wrapped so tests can patch/mock easier.
    """
    return datetime.now(timezone.utc)


def calendar_day(instant: datetime, tz: tzinfo) -> date:
    """Calendar day ``instant`` falls on in ``tz``.

    Naive datetimes are taken as wall time already expressed in ``tz``.
    """
    if instant.tzinfo is None:
        return instant.date()
    return instant.astimezone(tz).date()


def format_hora(value: datetime) -> str:
    return value.strftime(TIME_FORMAT)


def format_fecha_hora(value: datetime) -> str:
    return value.strftime(DATETIME_FORMAT)


class DayClock:
    """Server clock bound to the configured time zone.

    Every storage operation asks this object for "now" and "today", so the
    duplicate check, the insert, the listing and the export all agree on where
    the day boundary is. Instants are stored as naive UTC and shown in the
    configured zone.
    """

    def __init__(self, tz: tzinfo, now_fn: Callable[[], datetime] = utc_now):
        self._tz = tz
        self._now_fn = now_fn

    def now(self) -> datetime:
        """Aware time in the configured zone, truncated to seconds."""
        instant = self._now_fn()
        if instant.tzinfo is None:
            instant = instant.replace(tzinfo=self._tz)
        return instant.astimezone(self._tz).replace(microsecond=0)

    def day_of(self, instant: datetime) -> date:
        return calendar_day(instant, self._tz)

    def today(self) -> date:
        return self.day_of(self.now())

    def to_storage(self, instant: datetime) -> datetime:
        return instant.astimezone(timezone.utc).replace(tzinfo=None)

    def from_storage(self, value: datetime) -> datetime:
        return value.replace(tzinfo=timezone.utc).astimezone(self._tz)
