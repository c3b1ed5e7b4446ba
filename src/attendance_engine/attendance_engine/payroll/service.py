from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date, datetime
from typing import TYPE_CHECKING, Optional, Sequence

import pandas as pd

from ..punches.model import Punch, PunchSession
from ..punches.repository import PunchRepository
from ..schedules.model import ResolvedDay
from .calculator.base import PremiumCalculator
from .model import LegalPremiums

if TYPE_CHECKING:
    from ..attendance.service import AttendanceService

logger = logging.getLogger(__name__)


class CachedPremiumCalculator(PremiumCalculator):
    """Reuse premiums cached on the day's entry punch, computing and storing them once.

    Only settled working days (complete session, exit after entry) touch the cache,
    and a cached value is reused only while the session's exit matches the exit it
    was computed against. ``force`` bypasses the cache; used when an approved
    correction changed the day.
    """

    def __init__(
        self,
        inner: PremiumCalculator,
        punches: PunchRepository,
        day_punches: Sequence[Punch],
        *,
        force: bool = False,
    ):
        self._inner = inner
        self._punches = punches
        self._by_id = {p.punch_id: p for p in day_punches if p.punch_id is not None}
        self._force = force

    def compute(self, resolved: ResolvedDay, session: PunchSession) -> LegalPremiums:
        if not self._cacheable(resolved, session):
            return self._inner.compute(resolved, session)

        punch = self._by_id.get(session.entry_punch_id)
        if (
            punch is not None
            and not self._force
            and punch.premiums_computed
            and punch.premiums is not None
            and punch.premiums_exit == session.exit
        ):
            return punch.premiums

        premiums = self._inner.compute(resolved, session)
        if punch is not None:
            if not self._punches.save_premiums(punch_id=punch.punch_id, premiums=premiums, exit_at=session.exit):
                logger.warning("Could not cache premiums on punch %s", punch.punch_id)
        return premiums

    @staticmethod
    def _cacheable(resolved: ResolvedDay, session: PunchSession) -> bool:
        return (
            resolved.is_working
            and session.entry_punch_id is not None
            and session.is_complete
            and session.exit > session.entry
        )


def _hhmm(minutes: int) -> str:
    return f"{minutes // 60:02d}:{minutes % 60:02d}"


def _clock(value: Optional[datetime]) -> str:
    return value.strftime("%H:%M") if value else "-"


@dataclass(frozen=True)
class ReportData:
    rows: list[dict]
    summary: dict

    def to_frame(self) -> pd.DataFrame:
        return pd.DataFrame(self.rows)

    def to_excel(self, output) -> None:
        """Write detail and summary sheets to a path or binary buffer."""
        with pd.ExcelWriter(output, engine="openpyxl") as writer:
            self.to_frame().to_excel(writer, sheet_name="Detalle", index=False)
            pd.DataFrame([self.summary]).to_excel(writer, sheet_name="Resumen", index=False)


class PeriodReportService:
    def __init__(self, attendance: "AttendanceService"):
        self._attendance = attendance

    def build_report(self, *, user_id: int, start: date, end: date) -> ReportData:
        period = self._attendance.analyze_period(user_id, start, end)

        rows: list[dict] = []
        for r in period.results:
            rows.append(
                {
                    "user_id": r.user_id,
                    "work_date": r.work_date.strftime("%Y-%m-%d"),
                    "weekday": r.weekday_name,
                    "expected_entry": _clock(r.expected_entry),
                    "expected_exit": _clock(r.expected_exit),
                    "check_in": _clock(r.actual_entry),
                    "check_out": _clock(r.actual_exit),
                    "minutes_late": r.minutes_late,
                    "minutes_extra": r.minutes_extra,
                    "net_late": r.net_late_minutes,
                    "net_extra": r.net_extra_minutes,
                    "worked_hours": _hhmm(r.worked_minutes),
                    "expected_hours": _hhmm(r.expected_minutes),
                    "hour_delta": round(r.hour_delta, 2),
                    "day_overtime_hours": round(r.premiums.day_overtime_hours, 2),
                    "night_overtime_hours": round(r.premiums.night_overtime_hours, 2),
                    "night_ordinary_hours": round(r.premiums.night_ordinary_hours, 2),
                    "status": r.status.value,
                    "note": r.message,
                }
            )

        s = period.summary
        summary = {
            "user_id": user_id,
            "start": start.strftime("%Y-%m-%d"),
            "end": end.strftime("%Y-%m-%d"),
            "absences": s.absences,
            "unjustified_absences": s.unjustified_absences,
            "lateness": s.uncompensated_lateness,
            "compensated_lateness": s.compensated_lateness,
            "late_minutes": s.uncompensated_late_minutes,
            "extended_breaks": s.extended_breaks,
            "early_departures": s.early_departures,
            "incomplete_days": s.incomplete_days,
            "unscheduled_days": s.unscheduled_days,
            "surplus": _hhmm(s.surplus_minutes),
            "premium_hours": round(s.premiums.total_hours, 2),
        }
        return ReportData(rows=rows, summary=summary)
