from __future__ import annotations

import logging
from dataclasses import replace
from datetime import date, datetime, timedelta
from typing import Iterable, Mapping, Optional, Sequence

from ..common.validators import require_non_negative
from ..core.config import EngineConfig
from ..core.enums import DayKind, PunchType
from ..core.exceptions import ConfigurationError, NoScheduleAssigned
from ..punches.model import Punch
from ..requests.model import Absence, Correction
from .model import Assignment, DayOverride, Holiday, ResolvedDay, Schedule

logger = logging.getLogger(__name__)


def _inherit(*values):
    """First non-None value of the chain ``override -> parent -> system default``."""
    for v in values:
        if v is not None:
            return v
    return None


def _assignment_sort_key(a: Assignment):
    return (a.created_at or datetime.min, a.assignment_id)


class ScheduleResolver:
    """Resolve the effective expectations of one (user, date)."""

    def __init__(self, config: Optional[EngineConfig] = None):
        self._config = config or EngineConfig()

    @property
    def config(self) -> EngineConfig:
        return self._config

    def find_assignment(self, user_id: int, work_date: date, assignments: Iterable[Assignment]) -> Assignment:
        covering = [a for a in assignments if a.user_id == user_id and a.covers(work_date)]
        if not covering:
            raise NoScheduleAssigned(user_id, work_date)

        covering.sort(key=_assignment_sort_key, reverse=True)
        if len(covering) > 1:
            logger.warning(
                "Overlapping assignments for user %s on %s: %s; using %s",
                user_id,
                work_date,
                [a.assignment_id for a in covering],
                covering[0].assignment_id,
            )
        return covering[0]

    def resolve(
        self,
        user_id: int,
        work_date: date,
        *,
        assignments: Iterable[Assignment],
        schedules: Mapping[int, Schedule],
        holiday: Optional[Holiday] = None,
        absence: Optional[Absence] = None,
    ) -> ResolvedDay:
        assignment = self.find_assignment(user_id, work_date, assignments)
        schedule = schedules.get(assignment.schedule_id)
        if schedule is None:
            raise ConfigurationError(f"Horario {assignment.schedule_id} no existe")
        if not schedule.is_active:
            raise ConfigurationError(f"Horario {schedule.schedule_id} ({schedule.name}) está inactivo")

        resolved = self._resolve_weekday(user_id, work_date, schedule)

        if holiday is not None and holiday.holiday_date == work_date and not holiday.laborable:
            resolved = self._cleared(resolved, DayKind.HOLIDAY, holiday_name=holiday.name)

        if absence is not None and absence.is_approved and absence.user_id == user_id and absence.covers(work_date):
            resolved = self._cleared(resolved, DayKind.EXCUSED, absence_type=absence.absence_type)

        logger.debug(
            "Resolved user=%s date=%s schedule=%s kind=%s",
            user_id,
            work_date,
            schedule.schedule_id,
            resolved.kind.value,
        )
        return resolved

    def _resolve_weekday(self, user_id: int, work_date: date, schedule: Schedule) -> ResolvedDay:
        detail = schedule.detail_for(work_date.isoweekday())
        if detail is None or not detail.laborable:
            return ResolvedDay(
                user_id=user_id,
                work_date=work_date,
                kind=DayKind.NON_WORKING,
                schedule_id=schedule.schedule_id,
            )

        entry, exit_ = self._expected_times(work_date, detail, schedule)
        return ResolvedDay(
            user_id=user_id,
            work_date=work_date,
            kind=DayKind.WORKING,
            schedule_id=schedule.schedule_id,
            expected_entry=entry,
            expected_exit=exit_,
            tolerance_minutes=require_non_negative(
                _inherit(detail.tolerance_minutes, self._config.default_tolerance_minutes),
                "ToleranciaMin",
            ),
            rounding_minutes=require_non_negative(
                _inherit(detail.rounding_minutes, self._config.default_rounding_minutes),
                "RedondeoMin",
            ),
            lunch_minutes=require_non_negative(detail.lunch_minutes, "DescansoMin"),
            allow_compensation=bool(_inherit(detail.allow_compensation, schedule.allow_compensation, False)),
        )

    @staticmethod
    def _expected_times(work_date: date, detail: DayOverride, schedule: Schedule) -> tuple[datetime, datetime]:
        if detail.expected_entry is None or detail.expected_exit is None:
            raise ConfigurationError(
                f"Horario {schedule.schedule_id} día {detail.weekday}: laborable sin hora de entrada/salida"
            )

        entry = datetime.combine(work_date, detail.expected_entry)
        exit_ = datetime.combine(work_date, detail.expected_exit)
        if exit_ <= entry:
            # overnight shift
            exit_ += timedelta(days=1)
        return entry, exit_

    @staticmethod
    def _cleared(resolved: ResolvedDay, kind: DayKind, **extra) -> ResolvedDay:
        return replace(
            resolved,
            kind=kind,
            expected_entry=None,
            expected_exit=None,
            tolerance_minutes=0,
            rounding_minutes=0,
            lunch_minutes=0,
            allow_compensation=False,
            **extra,
        )

    def apply_corrections(
        self,
        resolved: ResolvedDay,
        punches: Sequence[Punch],
        corrections: Iterable[Correction],
    ) -> list[Punch]:
        """Substitute approved correction times for the matching real punches.

        The entry correction replaces the first entry, the exit correction the last
        exit; a missing punch of that type is created.
        """
        out = sorted(punches, key=lambda p: p.timestamp)
        for c in corrections:
            if not c.is_approved or c.user_id != resolved.user_id or c.work_date != resolved.work_date:
                continue

            at = self._correction_datetime(resolved, c)
            idx = self._punch_index(out, c.punch_type)
            if idx is None:
                out.append(Punch(punch_id=None, user_id=c.user_id, timestamp=at, punch_type=c.punch_type))
            else:
                out[idx] = replace(out[idx], timestamp=at)
            logger.info(
                "Correction %s applied: user=%s date=%s %s -> %s",
                c.correction_id,
                c.user_id,
                c.work_date,
                c.punch_type.value,
                at.strftime("%H:%M"),
            )

        out.sort(key=lambda p: p.timestamp)
        return out

    @staticmethod
    def _correction_datetime(resolved: ResolvedDay, c: Correction) -> datetime:
        at = datetime.combine(c.work_date, c.requested_time)
        if (
            c.punch_type == PunchType.EXIT
            and resolved.is_overnight
            and resolved.expected_entry is not None
            and at <= resolved.expected_entry
        ):
            at += timedelta(days=1)
        return at

    @staticmethod
    def _punch_index(punches: list[Punch], punch_type: PunchType) -> Optional[int]:
        indexes = [i for i, p in enumerate(punches) if p.punch_type == punch_type]
        if not indexes:
            return None
        return indexes[0] if punch_type == PunchType.ENTRY else indexes[-1]
