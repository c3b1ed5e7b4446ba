from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import date, time

import pytest

from src.attendance_engine.attendance_engine.schedules.model import Assignment, DayOverride, Schedule


class FakeScheduleRepo:
    def __init__(self, schedules=(), assignments=()):
        self._schedules = {s.schedule_id: s for s in schedules}
        self._assignments = list(assignments)

    def list_assignments_for_user(self, *, user_id, start, end):
        return [
            a
            for a in self._assignments
            if a.user_id == user_id and a.valid_from <= end and (a.valid_to is None or a.valid_to >= start)
        ]

    def get_schedule(self, schedule_id):
        return self._schedules.get(schedule_id)


class FakePunchRepo:
    def __init__(self, punches=()):
        self.punches = list(punches)
        self.saved: list[int] = []

    def list_between(self, *, user_id, start, end):
        return sorted(
            (p for p in self.punches if p.user_id == user_id and start <= p.timestamp < end),
            key=lambda p: p.timestamp,
        )

    def save_premiums(self, *, punch_id, premiums, exit_at):
        for i, p in enumerate(self.punches):
            if p.punch_id == punch_id:
                self.punches[i] = replace(p, premiums=premiums, premiums_computed=True, premiums_exit=exit_at)
                self.saved.append(punch_id)
                return True
        return False


class FakeHolidayRepo:
    def __init__(self, holidays=()):
        self._by_date = {h.holiday_date: h for h in holidays}

    def get_by_date(self, holiday_date):
        return self._by_date.get(holiday_date)


class FakeRequestRepo:
    def __init__(self, absences=(), corrections=()):
        self.absences = list(absences)
        self.corrections = list(corrections)

    def list_absences(self, *, user_id, start, end, status=None):
        return [
            a
            for a in self.absences
            if a.user_id == user_id
            and a.start_date <= end
            and a.end_date >= start
            and (status is None or a.status == status)
        ]

    def list_corrections(self, *, user_id, start, end, status=None):
        return [
            c
            for c in self.corrections
            if c.user_id == user_id and start <= c.work_date <= end and (status is None or c.status == status)
        ]


@dataclass
class Repos:
    schedules: FakeScheduleRepo
    punches: FakePunchRepo = field(default_factory=FakePunchRepo)
    holidays: FakeHolidayRepo = field(default_factory=FakeHolidayRepo)
    requests: FakeRequestRepo = field(default_factory=FakeRequestRepo)


@pytest.fixture
def office_schedule() -> Schedule:
    """Mon-Fri 08:00-17:00, 5 min tolerance, 60 min lunch, Saturday off, no Sunday row."""
    weekdays = tuple(
        DayOverride(weekday=d, expected_entry=time(8, 0), expected_exit=time(17, 0), tolerance_minutes=5, lunch_minutes=60)
        for d in range(1, 6)
    )
    return Schedule(
        schedule_id=1,
        name="Oficina",
        allow_compensation=True,
        details=weekdays + (DayOverride(weekday=6, laborable=False),),
    )


@pytest.fixture
def make_repos():
    def _make(schedules, assignments, *, punches=(), holidays=(), absences=(), corrections=()) -> Repos:
        return Repos(
            schedules=FakeScheduleRepo(schedules, assignments),
            punches=FakePunchRepo(punches),
            holidays=FakeHolidayRepo(holidays),
            requests=FakeRequestRepo(absences, corrections),
        )

    return _make


@pytest.fixture
def repos(make_repos, office_schedule) -> Repos:
    assignment = Assignment(assignment_id=1, user_id=7, schedule_id=1, valid_from=date(2025, 1, 1))
    return make_repos([office_schedule], [assignment])
