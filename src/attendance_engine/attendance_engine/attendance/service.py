from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date, datetime, time, timedelta
from typing import Optional

from ..core.config import EngineConfig
from ..core.enums import PunchType, RequestStatus
from ..core.exceptions import ConfigurationError, NoScheduleAssigned, ValidationError
from ..payroll.calculator.base import PremiumCalculator
from ..payroll.calculator.standard_calculator import StandardPremiumCalculator
from ..payroll.service import CachedPremiumCalculator
from ..punches.model import Punch
from ..punches.repository import PunchRepository
from ..punches.session import localize
from ..requests.repository import RequestRepository
from ..schedules.model import ResolvedDay, Schedule
from ..schedules.repository import HolidayRepository, ScheduleRepository
from ..schedules.resolver import ScheduleResolver
from .aggregator import aggregate_period
from .calculator import LatenessCalculator
from .engine import compute_daily_attendance
from .model import DailyResult, PeriodSummary

logger = logging.getLogger(__name__)

# How long after the expected end of an overnight shift its exit punch is still accepted.
OVERNIGHT_EXIT_GRACE = timedelta(hours=6)


@dataclass(frozen=True)
class PeriodAttendance:
    results: list[DailyResult]
    summary: PeriodSummary


class AttendanceService:
    """Reads one day's inputs through the repositories and runs the pure engine."""

    def __init__(
        self,
        schedules: ScheduleRepository,
        punches: PunchRepository,
        holidays: HolidayRepository,
        requests: RequestRepository,
        *,
        config: Optional[EngineConfig] = None,
        calculator: Optional[LatenessCalculator] = None,
        premium_calculator: Optional[PremiumCalculator] = None,
    ):
        self._schedules = schedules
        self._punches = punches
        self._holidays = holidays
        self._requests = requests
        self._config = config or EngineConfig()
        self._resolver = ScheduleResolver(self._config)
        self._calculator = calculator or LatenessCalculator()
        self._premium_calculator = premium_calculator or StandardPremiumCalculator(self._config)

    def analyze_day(self, user_id: int, work_date: date, *, force_premiums: bool = False) -> DailyResult:
        assignments = self._schedules.list_assignments_for_user(user_id=user_id, start=work_date, end=work_date)
        schedules = self._load_schedules(a.schedule_id for a in assignments)
        holiday = self._holidays.get_by_date(work_date)
        absences = self._requests.list_absences(
            user_id=user_id, start=work_date, end=work_date, status=RequestStatus.APPROVED
        )
        absence = next((a for a in absences if a.is_approved and a.covers(work_date)), None)
        corrections = [
            c
            for c in self._requests.list_corrections(
                user_id=user_id, start=work_date, end=work_date, status=RequestStatus.APPROVED
            )
            if c.is_approved and c.work_date == work_date
        ]

        resolved = self._resolver.resolve(
            user_id,
            work_date,
            assignments=assignments,
            schedules=schedules,
            holiday=holiday,
            absence=absence,
        )
        punches = self._punches_for_day(user_id, resolved)

        premium_calculator = CachedPremiumCalculator(
            self._premium_calculator,
            self._punches,
            punches,
            # an approved correction may have changed the cached inputs
            force=force_premiums or bool(corrections),
        )
        return compute_daily_attendance(
            user_id,
            work_date,
            punches,
            assignments=assignments,
            schedules=schedules,
            holiday=holiday,
            absence=absence,
            corrections=corrections,
            config=self._config,
            calculator=self._calculator,
            premium_calculator=premium_calculator,
        )

    def recompute_day(self, user_id: int, work_date: date) -> DailyResult:
        """Re-run the day ignoring cached premiums (after a correction is approved)."""
        return self.analyze_day(user_id, work_date, force_premiums=True)

    def analyze_period(self, user_id: int, start: date, end: date) -> PeriodAttendance:
        if end < start:
            raise ValidationError("La fecha final debe ser >= la fecha inicial")

        results: list[DailyResult] = []
        unscheduled = 0
        day = start
        while day <= end:
            try:
                results.append(self.analyze_day(user_id, day))
            except NoScheduleAssigned:
                logger.warning("User %s has no schedule on %s; day skipped", user_id, day)
                unscheduled += 1
            day += timedelta(days=1)

        return PeriodAttendance(results=results, summary=aggregate_period(results, unscheduled_days=unscheduled))

    def _load_schedules(self, schedule_ids) -> dict[int, Schedule]:
        out: dict[int, Schedule] = {}
        for sid in set(schedule_ids):
            schedule = self._schedules.get_schedule(sid)
            if schedule is not None:
                out[sid] = schedule
        return out

    def _punches_for_day(self, user_id: int, resolved: ResolvedDay) -> list[Punch]:
        day_start = datetime.combine(resolved.work_date, time.min)
        window_end = day_start + timedelta(days=1)
        if resolved.is_overnight:
            window_end = max(window_end, resolved.expected_exit + OVERNIGHT_EXIT_GRACE)

        raw = self._punches.list_between(user_id=user_id, start=day_start, end=window_end)
        punches = localize(raw, self._config.local_timezone)

        carried_until = self._previous_overnight_exit(user_id, resolved.work_date)
        entries = [p.timestamp for p in punches if p.punch_type == PunchType.ENTRY]
        first_entry = min(entries) if entries else None
        out = []
        for p in punches:
            if p.timestamp >= day_start + timedelta(days=1) and p.punch_type != PunchType.EXIT:
                continue
            if (
                carried_until is not None
                and p.punch_type == PunchType.EXIT
                and p.timestamp <= carried_until
                and (first_entry is None or p.timestamp < first_entry)
            ):
                # belongs to yesterday's overnight shift
                continue
            out.append(p)
        return out

    def _previous_overnight_exit(self, user_id: int, work_date: date) -> Optional[datetime]:
        previous = work_date - timedelta(days=1)
        assignments = self._schedules.list_assignments_for_user(user_id=user_id, start=previous, end=previous)
        if not assignments:
            return None
        try:
            resolved = self._resolver.resolve(
                user_id,
                previous,
                assignments=assignments,
                schedules=self._load_schedules(a.schedule_id for a in assignments),
            )
        except NoScheduleAssigned:
            return None
        except ConfigurationError as e:
            logger.warning("Previous day %s not resolvable for user %s: %s", previous, user_id, e)
            return None
        if not resolved.is_overnight:
            return None
        return resolved.expected_exit + OVERNIGHT_EXIT_GRACE
