from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from .model import Assignment, Holiday, Schedule


class ScheduleRepository(Protocol):
    def list_assignments_for_user(self, *, user_id: int, start: date, end: date) -> Sequence[Assignment]:
        """Assignments of ``user_id`` whose range intersects ``[start, end]``."""

        raise NotImplementedError

    def get_schedule(self, schedule_id: int) -> Optional[Schedule]:
        raise NotImplementedError


class HolidayRepository(Protocol):
    def get_by_date(self, holiday_date: date) -> Optional[Holiday]:
        raise NotImplementedError
