"""Pure entry points of the attendance engine.

Nothing here touches storage: callers read punches, schedules, holidays, absences
and corrections from one consistent snapshot and pass them in.
"""

from __future__ import annotations

from datetime import date
from typing import Iterable, Mapping, Optional, Sequence

from ..core.config import EngineConfig
from ..payroll.calculator.base import PremiumCalculator
from ..payroll.calculator.standard_calculator import StandardPremiumCalculator
from ..punches.model import Punch
from ..punches.session import build_session, localize
from ..requests.model import Absence, Correction
from ..schedules.model import Assignment, Holiday, Schedule
from ..schedules.resolver import ScheduleResolver
from .aggregator import aggregate_period
from .assembler import assemble_daily_result
from .calculator import LatenessCalculator
from .model import DailyResult

__all__ = ["compute_daily_attendance", "aggregate_period"]


def compute_daily_attendance(
    user_id: int,
    work_date: date,
    punches: Sequence[Punch],
    *,
    assignments: Iterable[Assignment],
    schedules: Mapping[int, Schedule],
    holiday: Optional[Holiday] = None,
    absence: Optional[Absence] = None,
    corrections: Iterable[Correction] = (),
    config: Optional[EngineConfig] = None,
    calculator: Optional[LatenessCalculator] = None,
    premium_calculator: Optional[PremiumCalculator] = None,
) -> DailyResult:
    """Resolve, build the session, compute and assemble one day's result.

    Raises ``NoScheduleAssigned`` when no assignment covers ``work_date`` and
    ``ConfigurationError`` when the covering schedule is unusable.
    """
    config = config or EngineConfig()
    resolver = ScheduleResolver(config)
    calculator = calculator or LatenessCalculator()
    premium_calculator = premium_calculator or StandardPremiumCalculator(config)

    resolved = resolver.resolve(
        user_id,
        work_date,
        assignments=assignments,
        schedules=schedules,
        holiday=holiday,
        absence=absence,
    )
    local_punches = resolver.apply_corrections(resolved, localize(punches, config.local_timezone), corrections)
    session = build_session(local_punches, timezone_name=config.local_timezone)

    computation = calculator.compute(resolved, session)
    premiums = premium_calculator.compute(resolved, session)
    return assemble_daily_result(resolved, session, computation, premiums)
