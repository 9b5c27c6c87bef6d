"""Relógio de sistema no fuso do negócio."""

from __future__ import annotations

import datetime as dt
from zoneinfo import ZoneInfo


class SystemClock:
    """`now()` naive no fuso configurado (SCHEDULE_TIMEZONE)."""

    def __init__(self, timezone: str = "UTC") -> None:
        self._tz = ZoneInfo(timezone)

    def now(self) -> dt.datetime:
        return dt.datetime.now(self._tz).replace(tzinfo=None, microsecond=0)

    def today(self) -> dt.date:
        return self.now().date()
