from __future__ import annotations

from datetime import datetime, timedelta
from typing import Optional

from ...core.config import EngineConfig
from ...punches.model import PunchSession
from ...schedules.model import ResolvedDay
from ...timebuckets.splitter import split_segments
from ..model import LegalPremiums
from .base import PremiumCalculator

Segment = tuple[datetime, datetime]


def _tail(segments: list[Segment], minutes: int) -> list[Segment]:
    """The last ``minutes`` of worked time, as segments."""
    remaining = timedelta(minutes=minutes)
    out: list[Segment] = []
    for start, end in reversed(segments):
        if remaining <= timedelta():
            break
        span = end - start
        if span <= remaining:
            out.append((start, end))
            remaining -= span
        else:
            out.append((end - remaining, end))
            remaining = timedelta()
    out.reverse()
    return out


class StandardPremiumCalculator(PremiumCalculator):
    """Standard rule: overtime is the tail of the day beyond the expected minutes.

    Overtime minutes are split into day/night overtime; night minutes inside the
    expected minutes are the ordinary night differential. A lunch that was not
    clocked is taken out of ordinary time, day window first.
    """

    def __init__(self, config: Optional[EngineConfig] = None):
        self._config = config or EngineConfig()

    def compute(self, resolved: ResolvedDay, session: PunchSession) -> LegalPremiums:
        if not resolved.is_working or not session.is_complete or session.exit <= session.entry:
            return LegalPremiums()

        segments = self._worked_segments(session)
        unclocked_lunch = 0 if session.has_lunch else resolved.lunch_minutes

        total = self._split(segments)
        worked = max(0, total.total_minutes - unclocked_lunch)
        overtime = self._split(_tail(segments, max(0, worked - resolved.expected_minutes)))

        ordinary_day = total.day_minutes - overtime.day_minutes
        ordinary_night = total.night_minutes - overtime.night_minutes
        from_day = min(unclocked_lunch, max(ordinary_day, 0))
        ordinary_night -= unclocked_lunch - from_day

        return LegalPremiums(
            day_overtime_minutes=overtime.day_minutes,
            night_overtime_minutes=overtime.night_minutes,
            night_ordinary_minutes=max(0, ordinary_night),
        )

    def _split(self, segments: list[Segment]):
        return split_segments(segments, day_start=self._config.day_start, night_start=self._config.night_start)

    @staticmethod
    def _worked_segments(session: PunchSession) -> list[Segment]:
        if not session.has_lunch:
            return [(session.entry, session.exit)]

        lunch_start = max(session.lunch_start, session.entry)
        lunch_end = min(session.lunch_end, session.exit)
        return [s for s in ((session.entry, lunch_start), (lunch_end, session.exit)) if s[1] > s[0]]
