from __future__ import annotations

from ..core.constants import WEEKDAY_NAMES
from ..payroll.model import LegalPremiums
from ..punches.model import PunchSession
from ..schedules.model import ResolvedDay
from .model import DailyResult, DayComputation


def assemble_daily_result(
    resolved: ResolvedDay,
    session: PunchSession,
    computation: DayComputation,
    premiums: LegalPremiums,
) -> DailyResult:
    weekday = resolved.work_date.isoweekday()
    return DailyResult(
        user_id=resolved.user_id,
        work_date=resolved.work_date,
        weekday=weekday,
        weekday_name=WEEKDAY_NAMES[weekday],
        status=computation.status,
        message=computation.message,
        expected_entry=resolved.expected_entry,
        expected_exit=resolved.expected_exit,
        actual_entry=session.entry,
        actual_exit=session.exit,
        minutes_late=computation.minutes_late,
        minutes_extra=computation.minutes_extra,
        worked_minutes=computation.worked_minutes,
        expected_minutes=computation.expected_minutes,
        allow_compensation=computation.allow_compensation,
        compensated=computation.compensated,
        net_late_minutes=computation.net_late_minutes,
        net_extra_minutes=computation.net_extra_minutes,
        lunch_minutes=computation.lunch_minutes,
        actual_lunch_minutes=session.lunch_minutes,
        scheduled_lunch_minutes=resolved.lunch_minutes,
        premiums=premiums,
        anomalies=computation.anomalies,
    )
