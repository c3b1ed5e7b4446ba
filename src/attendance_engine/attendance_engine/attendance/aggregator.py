from __future__ import annotations

from typing import Iterable

from ..core.enums import DayStatus
from ..payroll.model import LegalPremiums
from .model import DailyResult, LateDetail, PeriodSummary


def _is_early_departure(r: DailyResult) -> bool:
    return bool(r.is_settled and r.actual_exit and r.expected_exit and r.actual_exit < r.expected_exit)


def _is_extended_break(r: DailyResult) -> bool:
    return r.is_settled and r.actual_lunch_minutes is not None and r.actual_lunch_minutes > r.scheduled_lunch_minutes


def aggregate_period(results: Iterable[DailyResult], *, unscheduled_days: int = 0) -> PeriodSummary:
    """Fold daily results into a period summary.

    Only uncompensated days contribute to the lateness minutes; surplus time is the
    net overtime left after compensation.
    """
    counts = {status: 0 for status in DayStatus}
    late_minutes = 0
    surplus = 0
    early = 0
    extended = 0
    anomaly_days = 0
    day_ot = night_ot = night_ord = 0
    details: list[LateDetail] = []

    for r in sorted(results, key=lambda x: x.work_date):
        counts[r.status] += 1
        if r.anomalies:
            anomaly_days += 1

        if r.status == DayStatus.LATE_UNCOMPENSATED:
            late_minutes += r.net_late_minutes
        if r.is_settled:
            surplus += r.net_extra_minutes
        if _is_early_departure(r):
            early += 1
        if _is_extended_break(r):
            extended += 1

        if r.minutes_late > 0 and r.is_settled:
            details.append(
                LateDetail(
                    work_date=r.work_date,
                    weekday_name=r.weekday_name,
                    expected_entry=r.expected_entry,
                    actual_entry=r.actual_entry,
                    minutes_late=r.minutes_late,
                    compensated=r.compensated,
                )
            )

        day_ot += r.premiums.day_overtime_minutes
        night_ot += r.premiums.night_overtime_minutes
        night_ord += r.premiums.night_ordinary_minutes

    return PeriodSummary(
        total_days=sum(counts.values()),
        punctual_days=counts[DayStatus.PUNCTUAL],
        absences=counts[DayStatus.JUSTIFIED_ABSENCE],
        unjustified_absences=counts[DayStatus.ABSENT],
        uncompensated_lateness=counts[DayStatus.LATE_UNCOMPENSATED],
        compensated_lateness=counts[DayStatus.LATE_COMPENSATED],
        uncompensated_late_minutes=late_minutes,
        surplus_minutes=surplus,
        early_departures=early,
        extended_breaks=extended,
        incomplete_days=counts[DayStatus.INCOMPLETE],
        holidays=counts[DayStatus.HOLIDAY],
        non_working_days=counts[DayStatus.NON_WORKING],
        anomaly_days=anomaly_days,
        unscheduled_days=unscheduled_days,
        premiums=LegalPremiums(
            day_overtime_minutes=day_ot,
            night_overtime_minutes=night_ot,
            night_ordinary_minutes=night_ord,
        ),
        late_details=tuple(details),
    )
