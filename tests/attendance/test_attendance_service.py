from __future__ import annotations

from datetime import date, datetime, time

import pytest

from src.attendance_engine.attendance_engine.attendance.service import AttendanceService
from src.attendance_engine.attendance_engine.core.enums import DayStatus, PunchType, RequestStatus
from src.attendance_engine.attendance_engine.core.exceptions import ValidationError
from src.attendance_engine.attendance_engine.payroll.calculator.base import PremiumCalculator
from src.attendance_engine.attendance_engine.payroll.calculator.standard_calculator import StandardPremiumCalculator
from src.attendance_engine.attendance_engine.payroll.model import LegalPremiums
from src.attendance_engine.attendance_engine.punches.model import Punch
from src.attendance_engine.attendance_engine.requests.model import Absence, Correction
from src.attendance_engine.attendance_engine.schedules.model import Assignment, DayOverride, Schedule

MONDAY = date(2025, 3, 3)


class CountingPremiumCalculator(PremiumCalculator):
    def __init__(self):
        self.calls = 0
        self._inner = StandardPremiumCalculator()

    def compute(self, resolved, session):
        self.calls += 1
        return self._inner.compute(resolved, session)


def _punch(punch_id: int, at: datetime, punch_type: PunchType) -> Punch:
    return Punch(punch_id=punch_id, user_id=7, timestamp=at, punch_type=punch_type)


def _service(repos, **kw) -> AttendanceService:
    return AttendanceService(repos.schedules, repos.punches, repos.holidays, repos.requests, **kw)


def test_analyze_day_caches_premiums_on_entry_punch(repos):
    repos.punches.punches = [
        _punch(1, datetime(2025, 3, 3, 8, 20), PunchType.ENTRY),
        _punch(2, datetime(2025, 3, 3, 18, 0), PunchType.EXIT),
    ]

    result = _service(repos).analyze_day(7, MONDAY)

    assert result.status == DayStatus.LATE_COMPENSATED
    assert result.premiums == LegalPremiums(day_overtime_minutes=40)
    assert repos.punches.saved == [1]
    assert repos.punches.punches[0].premiums_computed is True


def test_cached_premiums_are_reused_until_forced(repos):
    repos.punches.punches = [
        _punch(1, datetime(2025, 3, 3, 8, 0), PunchType.ENTRY),
        _punch(2, datetime(2025, 3, 3, 18, 0), PunchType.EXIT),
    ]
    counting = CountingPremiumCalculator()
    service = _service(repos, premium_calculator=counting)

    first = service.analyze_day(7, MONDAY)
    second = service.analyze_day(7, MONDAY)
    assert counting.calls == 1
    assert first.premiums == second.premiums

    service.recompute_day(7, MONDAY)
    assert counting.calls == 2


def test_incomplete_day_does_not_cache_premiums(repos):
    repos.punches.punches = [_punch(1, datetime(2025, 3, 3, 8, 0), PunchType.ENTRY)]
    service = _service(repos)

    pending = service.analyze_day(7, MONDAY)
    assert pending.status == DayStatus.INCOMPLETE
    assert repos.punches.saved == []
    assert repos.punches.punches[0].premiums_computed is False

    repos.punches.punches.append(_punch(2, datetime(2025, 3, 3, 23, 0), PunchType.EXIT))
    settled = service.analyze_day(7, MONDAY)

    assert settled.premiums == LegalPremiums(day_overtime_minutes=240, night_overtime_minutes=120)
    assert repos.punches.saved == [1]


def test_later_exit_invalidates_cached_premiums(repos):
    repos.punches.punches = [
        _punch(1, datetime(2025, 3, 3, 8, 0), PunchType.ENTRY),
        _punch(2, datetime(2025, 3, 3, 17, 0), PunchType.EXIT),
    ]
    counting = CountingPremiumCalculator()
    service = _service(repos, premium_calculator=counting)

    assert service.analyze_day(7, MONDAY).premiums == LegalPremiums()

    repos.punches.punches.append(_punch(3, datetime(2025, 3, 3, 19, 0), PunchType.EXIT))
    result = service.analyze_day(7, MONDAY)

    assert counting.calls == 2
    assert result.premiums.day_overtime_minutes == 120
    assert repos.punches.punches[0].premiums_exit == datetime(2025, 3, 3, 19, 0)


def test_approved_correction_bypasses_premium_cache(repos):
    repos.punches.punches = [
        _punch(1, datetime(2025, 3, 3, 8, 0), PunchType.ENTRY),
        _punch(2, datetime(2025, 3, 3, 17, 0), PunchType.EXIT),
    ]
    counting = CountingPremiumCalculator()
    service = _service(repos, premium_calculator=counting)
    service.analyze_day(7, MONDAY)

    repos.requests.corrections.append(
        Correction(1, 7, MONDAY, PunchType.EXIT, time(19, 0), "Cierre de mes", RequestStatus.APPROVED)
    )
    result = service.analyze_day(7, MONDAY)

    assert counting.calls == 2
    assert result.actual_exit == datetime(2025, 3, 3, 19, 0)
    assert result.premiums.day_overtime_minutes == 120


def test_pending_absence_does_not_excuse_day(repos):
    repos.requests.absences.append(Absence(1, 7, MONDAY, MONDAY, "permiso", RequestStatus.PENDING))
    result = _service(repos).analyze_day(7, MONDAY)

    assert result.status == DayStatus.ABSENT


def test_analyze_period_skips_unscheduled_days(make_repos, office_schedule):
    assignment = Assignment(assignment_id=1, user_id=7, schedule_id=1, valid_from=date(2025, 3, 4))
    repos = make_repos(
        [office_schedule],
        [assignment],
        punches=[
            _punch(1, datetime(2025, 3, 4, 8, 0), PunchType.ENTRY),
            _punch(2, datetime(2025, 3, 4, 17, 0), PunchType.EXIT),
            _punch(3, datetime(2025, 3, 5, 8, 20), PunchType.ENTRY),
            _punch(4, datetime(2025, 3, 5, 17, 0), PunchType.EXIT),
        ],
    )

    period = _service(repos).analyze_period(7, date(2025, 3, 3), date(2025, 3, 9))
    summary = period.summary

    assert [r.work_date for r in period.results][0] == date(2025, 3, 4)
    assert summary.total_days == 6
    assert summary.unscheduled_days == 1
    assert summary.punctual_days == 1
    assert summary.uncompensated_lateness == 1
    assert summary.unjustified_absences == 2
    assert summary.non_working_days == 2
    assert summary.uncompensated_late_minutes == 15


def test_analyze_period_rejects_reversed_range(repos):
    with pytest.raises(ValidationError):
        _service(repos).analyze_period(7, date(2025, 3, 9), date(2025, 3, 3))


def test_overnight_exit_belongs_to_the_shift_that_started_it(make_repos):
    night = Schedule(
        schedule_id=2,
        name="Nocturno",
        details=tuple(
            DayOverride(weekday=d, expected_entry=time(22, 0), expected_exit=time(6, 0), tolerance_minutes=5)
            for d in (1, 2)
        ),
    )
    repos = make_repos(
        [night],
        [Assignment(assignment_id=1, user_id=7, schedule_id=2, valid_from=date(2025, 1, 1))],
        punches=[
            _punch(1, datetime(2025, 3, 3, 22, 0), PunchType.ENTRY),
            _punch(2, datetime(2025, 3, 4, 6, 5), PunchType.EXIT),
            _punch(3, datetime(2025, 3, 4, 22, 0), PunchType.ENTRY),
            _punch(4, datetime(2025, 3, 5, 6, 0), PunchType.EXIT),
        ],
    )
    service = _service(repos)

    monday = service.analyze_day(7, date(2025, 3, 3))
    tuesday = service.analyze_day(7, date(2025, 3, 4))

    assert monday.actual_exit == datetime(2025, 3, 4, 6, 5)
    assert monday.minutes_extra == 5
    assert tuesday.actual_entry == datetime(2025, 3, 4, 22, 0)
    assert tuesday.actual_exit == datetime(2025, 3, 5, 6, 0)
    assert tuesday.status == DayStatus.PUNCTUAL
    assert tuesday.premiums.night_ordinary_minutes == 480
