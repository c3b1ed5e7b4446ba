from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime, time
from typing import Optional

from ..core.enums import DayKind


@dataclass(frozen=True)
class DayOverride:
    """Per-weekday configuration of a schedule (1=Monday..7=Sunday)."""

    weekday: int
    laborable: bool = True
    expected_entry: Optional[time] = None
    expected_exit: Optional[time] = None
    tolerance_minutes: Optional[int] = None
    rounding_minutes: Optional[int] = None
    lunch_minutes: int = 0
    allow_compensation: Optional[bool] = None


@dataclass(frozen=True)
class Schedule:
    """Named work schedule with its weekday overrides."""

    schedule_id: int
    name: str
    is_active: bool = True
    sede_id: Optional[int] = None
    allow_compensation: bool = False
    details: tuple[DayOverride, ...] = field(default_factory=tuple)

    def detail_for(self, weekday: int) -> Optional[DayOverride]:
        for d in self.details:
            if d.weekday == weekday:
                return d
        return None


@dataclass(frozen=True)
class Assignment:
    """Binds a user to a schedule over ``[valid_from, valid_to]``; ``valid_to=None`` is open-ended."""

    assignment_id: int
    user_id: int
    schedule_id: int
    valid_from: date
    valid_to: Optional[date] = None
    created_at: Optional[datetime] = None

    def covers(self, work_date: date) -> bool:
        if work_date < self.valid_from:
            return False
        return self.valid_to is None or work_date <= self.valid_to


@dataclass(frozen=True)
class Holiday:
    holiday_date: date
    name: str = ""
    laborable: bool = False


@dataclass(frozen=True)
class ResolvedDay:
    """Effective expectations for one (user, date) after every override is applied."""

    user_id: int
    work_date: date
    kind: DayKind
    schedule_id: Optional[int] = None
    expected_entry: Optional[datetime] = None
    expected_exit: Optional[datetime] = None
    tolerance_minutes: int = 0
    rounding_minutes: int = 0
    lunch_minutes: int = 0
    allow_compensation: bool = False
    holiday_name: Optional[str] = None
    absence_type: Optional[str] = None

    @property
    def is_working(self) -> bool:
        return self.kind == DayKind.WORKING

    @property
    def is_overnight(self) -> bool:
        return bool(self.expected_exit and self.expected_exit.date() > self.work_date)

    @property
    def expected_minutes(self) -> int:
        if not self.is_working or not self.expected_entry or not self.expected_exit:
            return 0
        span = int((self.expected_exit - self.expected_entry).total_seconds()) // 60
        return max(span - self.lunch_minutes, 0)
