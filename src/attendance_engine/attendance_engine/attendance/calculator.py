from __future__ import annotations

import logging
from datetime import timedelta
from typing import Optional

from ..common.datetime_utils import round_down, round_up, whole_minutes
from ..core.enums import Anomaly, DayKind, DayStatus
from ..punches.model import PunchSession
from ..schedules.model import ResolvedDay
from ..timebuckets.splitter import overlap_minutes
from .factory import CompensationStrategyFactory
from .model import DayComputation

logger = logging.getLogger(__name__)


class LatenessCalculator:
    """Minutes late, minutes extra, worked time and compensation of one day.

    Entry is rounded up and exit rounded down to the day's rounding grid before
    being compared with the expected times.
    """

    def __init__(self, *, strategy_factory: Optional[CompensationStrategyFactory] = None):
        self._factory = strategy_factory or CompensationStrategyFactory()

    def compute(self, resolved: ResolvedDay, session: PunchSession) -> DayComputation:
        anomalies = list(session.anomalies)

        if not resolved.is_working:
            return self._non_working(resolved, session, anomalies)

        expected = resolved.expected_minutes
        if not session.has_punches:
            return DayComputation(
                expected_minutes=expected,
                allow_compensation=resolved.allow_compensation,
                status=DayStatus.ABSENT,
                message="Sin marcaciones en día laborable",
                anomalies=tuple(anomalies),
            )

        if not session.is_complete:
            return DayComputation(
                expected_minutes=expected,
                allow_compensation=resolved.allow_compensation,
                status=DayStatus.INCOMPLETE,
                message="Faltan marcaciones de entrada o salida",
                anomalies=tuple(anomalies),
            )

        if session.exit < session.entry:
            # inverted punches are not authoritative; keep the day out of the totals
            logger.warning("Exit %s before entry %s; day left unsettled", session.exit, session.entry)
            anomalies.append(Anomaly.NEGATIVE_DURATION)
            return DayComputation(
                expected_minutes=expected,
                allow_compensation=resolved.allow_compensation,
                status=DayStatus.INCOMPLETE,
                message="Marcaciones inconsistentes: salida anterior a la entrada",
                anomalies=tuple(anomalies),
            )

        entry = round_up(session.entry, resolved.rounding_minutes)
        exit_ = round_down(session.exit, resolved.rounding_minutes)
        entry_limit = resolved.expected_entry + timedelta(minutes=resolved.tolerance_minutes)

        minutes_late = max(0, whole_minutes(entry - entry_limit))
        minutes_extra = max(0, whole_minutes(exit_ - resolved.expected_exit))

        lunch = self._lunch_minutes(session)
        if lunch is None:
            lunch = resolved.lunch_minutes
        worked = self._worked_minutes(session, lunch, anomalies)

        decision = self._factory.for_day(resolved).decide(minutes_late=minutes_late, minutes_extra=minutes_extra)
        return DayComputation(
            minutes_late=minutes_late,
            minutes_extra=minutes_extra,
            worked_minutes=worked,
            expected_minutes=expected,
            lunch_minutes=lunch,
            allow_compensation=resolved.allow_compensation,
            compensated=decision.compensated,
            net_late_minutes=decision.net_late_minutes,
            net_extra_minutes=decision.net_extra_minutes,
            status=decision.status,
            message=decision.message,
            anomalies=tuple(anomalies),
        )

    @staticmethod
    def _lunch_minutes(session: PunchSession) -> Optional[int]:
        """Measured lunch clipped to the worked interval, None when not clocked."""
        if not session.has_lunch:
            return None
        return overlap_minutes(session.lunch_start, session.lunch_end, session.entry, session.exit)

    @staticmethod
    def _worked_minutes(session: PunchSession, lunch_minutes: int, anomalies: list[Anomaly]) -> int:
        if session.exit < session.entry:
            logger.warning("Exit %s before entry %s; worked time clamped to zero", session.exit, session.entry)
            anomalies.append(Anomaly.NEGATIVE_DURATION)
            return 0
        return max(0, whole_minutes(session.exit - session.entry) - lunch_minutes)

    def _non_working(self, resolved: ResolvedDay, session: PunchSession, anomalies: list[Anomaly]) -> DayComputation:
        worked = 0
        if session.has_punches:
            anomalies.append(Anomaly.WORK_ON_NON_WORKING_DAY)
        if session.is_complete:
            lunch = self._lunch_minutes(session) or 0
            worked = self._worked_minutes(session, lunch, anomalies)

        if resolved.kind == DayKind.HOLIDAY:
            status = DayStatus.HOLIDAY
            message = f"Feriado: {resolved.holiday_name}" if resolved.holiday_name else "Feriado"
        elif resolved.kind == DayKind.EXCUSED:
            status = DayStatus.JUSTIFIED_ABSENCE
            message = f"Ausencia justificada ({resolved.absence_type})" if resolved.absence_type else "Ausencia justificada"
        else:
            status = DayStatus.NON_WORKING
            message = "Día no laborable"

        return DayComputation(worked_minutes=worked, status=status, message=message, anomalies=tuple(anomalies))
