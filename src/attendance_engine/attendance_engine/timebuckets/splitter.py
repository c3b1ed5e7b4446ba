"""Split a worked interval into day-window and night-window minutes.

The day window runs from ``day_start`` to ``night_start`` of every local calendar
day; everything else is night. The walk advances one boundary at a time (local
midnight, ``day_start`` or ``night_start``) so an interval may span any number of
midnights.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, time, timedelta
from typing import Iterable

from ..core.constants import DEFAULT_DAY_START, DEFAULT_NIGHT_START
from ..core.exceptions import NegativeDurationError


@dataclass(frozen=True)
class TimeBuckets:
    day_minutes: int = 0
    night_minutes: int = 0

    @property
    def total_minutes(self) -> int:
        return self.day_minutes + self.night_minutes

    def __add__(self, other: "TimeBuckets") -> "TimeBuckets":
        return TimeBuckets(
            day_minutes=self.day_minutes + other.day_minutes,
            night_minutes=self.night_minutes + other.night_minutes,
        )


def _next_boundary(cursor: datetime, day_start: time, night_start: time) -> datetime:
    today = cursor.date()
    for t in (day_start, night_start):
        candidate = datetime.combine(today, t)
        if candidate > cursor:
            return candidate
    return datetime.combine(today + timedelta(days=1), time.min)


def _is_day(moment: datetime, day_start: time, night_start: time) -> bool:
    return day_start <= moment.time() < night_start


def split_day_night(
    start: datetime,
    end: datetime,
    *,
    day_start: time = DEFAULT_DAY_START,
    night_start: time = DEFAULT_NIGHT_START,
) -> TimeBuckets:
    """Return the (day, night) whole minutes of ``[start, end)``.

    Seconds are accumulated per bucket and the night bucket takes the remainder, so
    ``day_minutes + night_minutes`` always equals the interval's whole minutes.
    """
    if end < start:
        raise NegativeDurationError(f"Intervalo inválido: {start} > {end}")

    day_seconds = 0
    cursor = start
    while cursor < end:
        boundary = min(_next_boundary(cursor, day_start, night_start), end)
        if _is_day(cursor, day_start, night_start):
            day_seconds += int((boundary - cursor).total_seconds())
        cursor = boundary

    total = int((end - start).total_seconds()) // 60
    day = min(day_seconds // 60, total)
    return TimeBuckets(day_minutes=day, night_minutes=total - day)


def split_segments(
    segments: Iterable[tuple[datetime, datetime]],
    *,
    day_start: time = DEFAULT_DAY_START,
    night_start: time = DEFAULT_NIGHT_START,
) -> TimeBuckets:
    out = TimeBuckets()
    for seg_start, seg_end in segments:
        out = out + split_day_night(seg_start, seg_end, day_start=day_start, night_start=night_start)
    return out


def overlap_minutes(a_start: datetime, a_end: datetime, b_start: datetime, b_end: datetime) -> int:
    start = max(a_start, b_start)
    end = min(a_end, b_end)
    if end <= start:
        return 0
    return int((end - start).total_seconds()) // 60
