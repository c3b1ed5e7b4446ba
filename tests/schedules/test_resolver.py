from __future__ import annotations

from dataclasses import replace
from datetime import date, datetime, time

import pytest

from src.attendance_engine.attendance_engine.core.config import EngineConfig
from src.attendance_engine.attendance_engine.core.enums import DayKind, PunchType, RequestStatus
from src.attendance_engine.attendance_engine.core.exceptions import ConfigurationError, NoScheduleAssigned
from src.attendance_engine.attendance_engine.punches.model import Punch
from src.attendance_engine.attendance_engine.requests.model import Absence, Correction
from src.attendance_engine.attendance_engine.schedules.model import Assignment, DayOverride, Holiday, Schedule
from src.attendance_engine.attendance_engine.schedules.resolver import ScheduleResolver

MONDAY = date(2025, 3, 3)
SATURDAY = date(2025, 3, 8)
SUNDAY = date(2025, 3, 9)


def _office(schedule_id: int = 1, *, allow_compensation: bool = True, **overrides) -> Schedule:
    weekdays = tuple(
        DayOverride(
            weekday=d,
            expected_entry=time(8, 0),
            expected_exit=time(17, 0),
            tolerance_minutes=overrides.get("tolerance_minutes", 5),
            lunch_minutes=60,
            allow_compensation=overrides.get("detail_compensation"),
        )
        for d in range(1, 6)
    )
    return Schedule(
        schedule_id=schedule_id,
        name="Oficina",
        allow_compensation=allow_compensation,
        details=weekdays + (DayOverride(weekday=6, laborable=False),),
    )


def _assignment(schedule_id: int = 1, *, assignment_id: int = 1, **kw) -> Assignment:
    return Assignment(
        assignment_id=assignment_id,
        user_id=kw.get("user_id", 7),
        schedule_id=schedule_id,
        valid_from=kw.get("valid_from", date(2025, 1, 1)),
        valid_to=kw.get("valid_to"),
        created_at=kw.get("created_at"),
    )


def _resolve(work_date=MONDAY, *, schedule=None, config=None, **kw):
    schedule = schedule or _office()
    resolver = ScheduleResolver(config)
    return resolver.resolve(
        7,
        work_date,
        assignments=kw.get("assignments", [_assignment(schedule.schedule_id)]),
        schedules={schedule.schedule_id: schedule},
        holiday=kw.get("holiday"),
        absence=kw.get("absence"),
    )


def test_working_day_expectations():
    resolved = _resolve()

    assert resolved.kind == DayKind.WORKING
    assert resolved.expected_entry == datetime(2025, 3, 3, 8, 0)
    assert resolved.expected_exit == datetime(2025, 3, 3, 17, 0)
    assert resolved.tolerance_minutes == 5
    assert resolved.lunch_minutes == 60
    assert resolved.expected_minutes == 480
    assert resolved.allow_compensation is True


def test_tolerance_inherits_configured_default():
    resolved = _resolve(schedule=_office(tolerance_minutes=None), config=EngineConfig(default_tolerance_minutes=10))
    assert resolved.tolerance_minutes == 10


def test_rounding_inherits_configured_default():
    resolved = _resolve(config=EngineConfig(default_rounding_minutes=5))
    assert resolved.rounding_minutes == 5


def test_day_override_compensation_beats_schedule_flag():
    resolved = _resolve(schedule=_office(allow_compensation=True, detail_compensation=False))
    assert resolved.allow_compensation is False

    resolved = _resolve(schedule=_office(allow_compensation=False, detail_compensation=True))
    assert resolved.allow_compensation is True


def test_non_laborable_and_missing_weekdays_are_non_working():
    for day in (SATURDAY, SUNDAY):
        resolved = _resolve(day)
        assert resolved.kind == DayKind.NON_WORKING
        assert resolved.expected_entry is None
        assert resolved.expected_minutes == 0


def test_no_covering_assignment_raises():
    with pytest.raises(NoScheduleAssigned):
        _resolve(assignments=[_assignment(valid_from=date(2025, 4, 1))])

    with pytest.raises(NoScheduleAssigned):
        _resolve(assignments=[_assignment(valid_to=date(2025, 3, 2))])


def test_assignment_range_is_inclusive():
    resolved = _resolve(assignments=[_assignment(valid_from=MONDAY, valid_to=MONDAY)])
    assert resolved.kind == DayKind.WORKING


def test_overlapping_assignments_most_recent_wins():
    resolver = ScheduleResolver()
    older = _assignment(1, assignment_id=1, created_at=datetime(2025, 1, 1))
    newer = _assignment(2, assignment_id=2, created_at=datetime(2025, 2, 1))

    picked = resolver.find_assignment(7, MONDAY, [newer, older])
    assert picked.assignment_id == 2

    picked = resolver.find_assignment(7, MONDAY, [older, newer])
    assert picked.assignment_id == 2


def test_unknown_schedule_is_a_configuration_error():
    with pytest.raises(ConfigurationError):
        ScheduleResolver().resolve(7, MONDAY, assignments=[_assignment(99)], schedules={})


def test_inactive_schedule_is_a_configuration_error():
    schedule = replace(_office(), is_active=False)
    with pytest.raises(ConfigurationError):
        _resolve(schedule=schedule)


def test_laborable_day_without_times_is_a_configuration_error():
    schedule = Schedule(schedule_id=1, name="Roto", details=(DayOverride(weekday=1, expected_entry=time(8, 0)),))
    with pytest.raises(ConfigurationError):
        _resolve(schedule=schedule)


def test_negative_tolerance_is_a_configuration_error():
    with pytest.raises(ConfigurationError):
        _resolve(schedule=_office(tolerance_minutes=-3))


def test_non_laborable_holiday_forces_day_off():
    resolved = _resolve(holiday=Holiday(holiday_date=MONDAY, name="San José", laborable=False))

    assert resolved.kind == DayKind.HOLIDAY
    assert resolved.holiday_name == "San José"
    assert resolved.expected_entry is None
    assert resolved.expected_minutes == 0


def test_laborable_holiday_keeps_schedule():
    resolved = _resolve(holiday=Holiday(holiday_date=MONDAY, name="Puente", laborable=True))
    assert resolved.kind == DayKind.WORKING


def test_approved_absence_excuses_the_day():
    absence = Absence(
        absence_id=1,
        user_id=7,
        start_date=date(2025, 3, 1),
        end_date=date(2025, 3, 5),
        absence_type="vacaciones",
        status=RequestStatus.APPROVED,
    )
    resolved = _resolve(absence=absence)

    assert resolved.kind == DayKind.EXCUSED
    assert resolved.absence_type == "vacaciones"
    assert resolved.expected_minutes == 0


def test_pending_or_foreign_absence_is_ignored():
    pending = Absence(1, 7, MONDAY, MONDAY, "permiso", RequestStatus.PENDING)
    foreign = Absence(2, 8, MONDAY, MONDAY, "permiso", RequestStatus.APPROVED)

    assert _resolve(absence=pending).kind == DayKind.WORKING
    assert _resolve(absence=foreign).kind == DayKind.WORKING


def test_overnight_shift_ends_next_day():
    schedule = Schedule(
        schedule_id=3,
        name="Nocturno",
        details=(DayOverride(weekday=1, expected_entry=time(22, 0), expected_exit=time(6, 0), tolerance_minutes=0),),
    )
    resolved = _resolve(schedule=schedule)

    assert resolved.is_overnight
    assert resolved.expected_exit == datetime(2025, 3, 4, 6, 0)
    assert resolved.expected_minutes == 480


def test_approved_entry_correction_replaces_first_entry():
    resolver = ScheduleResolver()
    resolved = _resolve()
    punches = [
        Punch(
            punch_id=1,
            user_id=7,
            timestamp=datetime(2025, 3, 3, 8, 40),
            punch_type=PunchType.ENTRY,
            lunch_start=datetime(2025, 3, 3, 12, 0),
            lunch_end=datetime(2025, 3, 3, 13, 0),
        ),
        Punch(punch_id=2, user_id=7, timestamp=datetime(2025, 3, 3, 17, 0), punch_type=PunchType.EXIT),
    ]
    corrections = [
        Correction(1, 7, MONDAY, PunchType.ENTRY, time(8, 0), "Olvidé marcar", RequestStatus.APPROVED),
        Correction(2, 7, MONDAY, PunchType.EXIT, time(19, 0), "Extra", RequestStatus.PENDING),
    ]

    out = resolver.apply_corrections(resolved, punches, corrections)

    assert out[0].punch_id == 1
    assert out[0].timestamp == datetime(2025, 3, 3, 8, 0)
    assert out[0].lunch_start == datetime(2025, 3, 3, 12, 0)
    assert out[1].timestamp == datetime(2025, 3, 3, 17, 0)


def test_exit_correction_creates_missing_exit():
    resolver = ScheduleResolver()
    resolved = _resolve()
    punches = [Punch(punch_id=1, user_id=7, timestamp=datetime(2025, 3, 3, 8, 0), punch_type=PunchType.ENTRY)]
    corrections = [Correction(1, 7, MONDAY, PunchType.EXIT, time(17, 30), "Sin salida", RequestStatus.APPROVED)]

    out = resolver.apply_corrections(resolved, punches, corrections)

    assert len(out) == 2
    assert out[1].punch_id is None
    assert out[1].punch_type == PunchType.EXIT
    assert out[1].timestamp == datetime(2025, 3, 3, 17, 30)


def test_overnight_exit_correction_lands_next_day():
    schedule = Schedule(
        schedule_id=3,
        name="Nocturno",
        details=(DayOverride(weekday=1, expected_entry=time(22, 0), expected_exit=time(6, 0)),),
    )
    resolved = _resolve(schedule=schedule)
    corrections = [Correction(1, 7, MONDAY, PunchType.EXIT, time(6, 15), "Salida", RequestStatus.APPROVED)]

    out = ScheduleResolver().apply_corrections(resolved, [], corrections)

    assert out[0].timestamp == datetime(2025, 3, 4, 6, 15)
