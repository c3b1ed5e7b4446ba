from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Optional

from ..core.enums import Anomaly, DayStatus
from ..payroll.model import LegalPremiums


@dataclass(frozen=True)
class DayComputation:
    """Lateness/overtime figures of one day, before assembly."""

    minutes_late: int = 0
    minutes_extra: int = 0
    worked_minutes: int = 0
    expected_minutes: int = 0
    lunch_minutes: int = 0
    allow_compensation: bool = False
    compensated: bool = False
    net_late_minutes: int = 0
    net_extra_minutes: int = 0
    status: DayStatus = DayStatus.PUNCTUAL
    message: str = ""
    anomalies: tuple[Anomaly, ...] = ()

    @property
    def delta_minutes(self) -> int:
        return self.worked_minutes - self.expected_minutes


@dataclass(frozen=True)
class DailyResult:
    """Reconciled attendance for one (user, date)."""

    user_id: int
    work_date: date
    weekday: int
    weekday_name: str
    status: DayStatus
    message: str
    expected_entry: Optional[datetime] = None
    expected_exit: Optional[datetime] = None
    actual_entry: Optional[datetime] = None
    actual_exit: Optional[datetime] = None
    minutes_late: int = 0
    minutes_extra: int = 0
    worked_minutes: int = 0
    expected_minutes: int = 0
    allow_compensation: bool = False
    compensated: bool = False
    net_late_minutes: int = 0
    net_extra_minutes: int = 0
    lunch_minutes: int = 0
    actual_lunch_minutes: Optional[int] = None
    scheduled_lunch_minutes: int = 0
    premiums: LegalPremiums = field(default_factory=LegalPremiums)
    anomalies: tuple[Anomaly, ...] = ()

    @property
    def delta_minutes(self) -> int:
        return self.worked_minutes - self.expected_minutes

    @property
    def worked_hours(self) -> float:
        return self.worked_minutes / 60

    @property
    def expected_hours(self) -> float:
        return self.expected_minutes / 60

    @property
    def hour_delta(self) -> float:
        return self.delta_minutes / 60

    @property
    def is_settled(self) -> bool:
        """True when lateness/overtime were actually computed for the day."""
        return self.status in (DayStatus.PUNCTUAL, DayStatus.LATE_COMPENSATED, DayStatus.LATE_UNCOMPENSATED)


@dataclass(frozen=True)
class LateDetail:
    work_date: date
    weekday_name: str
    expected_entry: Optional[datetime]
    actual_entry: Optional[datetime]
    minutes_late: int
    compensated: bool


@dataclass(frozen=True)
class PeriodSummary:
    total_days: int = 0
    punctual_days: int = 0
    absences: int = 0
    unjustified_absences: int = 0
    uncompensated_lateness: int = 0
    compensated_lateness: int = 0
    uncompensated_late_minutes: int = 0
    surplus_minutes: int = 0
    early_departures: int = 0
    extended_breaks: int = 0
    incomplete_days: int = 0
    holidays: int = 0
    non_working_days: int = 0
    anomaly_days: int = 0
    unscheduled_days: int = 0
    premiums: LegalPremiums = field(default_factory=LegalPremiums)
    late_details: tuple[LateDetail, ...] = ()
