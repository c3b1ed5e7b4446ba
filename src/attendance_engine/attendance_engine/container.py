from __future__ import annotations

from dataclasses import dataclass

from .attendance.calculator import LatenessCalculator
from .attendance.factory import CompensationStrategyFactory
from .attendance.service import AttendanceService
from .core.config import EngineConfig
from .payroll.calculator.standard_calculator import StandardPremiumCalculator
from .payroll.service import PeriodReportService
from .punches.repository import PunchRepository
from .requests.repository import RequestRepository
from .schedules.repository import HolidayRepository, ScheduleRepository


@dataclass(frozen=True)
class Container:
    config: EngineConfig

    schedules_repo: ScheduleRepository
    punches_repo: PunchRepository
    holidays_repo: HolidayRepository
    requests_repo: RequestRepository

    attendance_service: AttendanceService
    period_report_service: PeriodReportService


def build_container(
    *,
    config: EngineConfig,
    schedules: ScheduleRepository,
    punches: PunchRepository,
    holidays: HolidayRepository,
    requests: RequestRepository,
) -> Container:
    attendance_service = AttendanceService(
        schedules,
        punches,
        holidays,
        requests,
        config=config,
        calculator=LatenessCalculator(strategy_factory=CompensationStrategyFactory()),
        premium_calculator=StandardPremiumCalculator(config),
    )
    period_report_service = PeriodReportService(attendance_service)

    return Container(
        config=config,
        schedules_repo=schedules,
        punches_repo=punches,
        holidays_repo=holidays,
        requests_repo=requests,
        attendance_service=attendance_service,
        period_report_service=period_report_service,
    )
