"""Example: run a week through the engine with in-memory repositories (no database).

Prints the period summary and writes the Excel report to ``reporte_asistencia.xlsx``.
"""

from dataclasses import replace
from datetime import date, datetime, time

from src.attendance_engine.attendance_engine.core.enums import PunchType
from src.attendance_engine.attendance_engine.main import create_engine
from src.attendance_engine.attendance_engine.punches.model import Punch
from src.attendance_engine.attendance_engine.schedules.model import Assignment, DayOverride, Schedule


class MemoryRepo:
    def __init__(self, schedules, assignments, punches):
        self._schedules = {s.schedule_id: s for s in schedules}
        self._assignments = assignments
        self._punches = punches

    def list_assignments_for_user(self, *, user_id, start, end):
        return [a for a in self._assignments if a.user_id == user_id and a.valid_from <= end]

    def get_schedule(self, schedule_id):
        return self._schedules.get(schedule_id)

    def list_between(self, *, user_id, start, end):
        return [p for p in self._punches if p.user_id == user_id and start <= p.timestamp < end]

    def save_premiums(self, *, punch_id, premiums, exit_at):
        for i, p in enumerate(self._punches):
            if p.punch_id == punch_id:
                self._punches[i] = replace(p, premiums=premiums, premiums_computed=True, premiums_exit=exit_at)
                return True
        return False

    def get_by_date(self, holiday_date):
        return None

    def list_absences(self, *, user_id, start, end, status=None):
        return []

    def list_corrections(self, *, user_id, start, end, status=None):
        return []


def main():
    schedule = Schedule(
        schedule_id=1,
        name="Oficina",
        allow_compensation=True,
        details=tuple(
            DayOverride(weekday=d, expected_entry=time(8), expected_exit=time(17), lunch_minutes=60)
            for d in range(1, 6)
        ),
    )
    punches = [
        Punch(1, 1, datetime(2025, 3, 3, 8, 20), PunchType.ENTRY),
        Punch(2, 1, datetime(2025, 3, 3, 18, 0), PunchType.EXIT),
        Punch(3, 1, datetime(2025, 3, 4, 7, 55), PunchType.ENTRY),
        Punch(4, 1, datetime(2025, 3, 4, 22, 30), PunchType.EXIT),
    ]
    repo = MemoryRepo([schedule], [Assignment(1, 1, 1, date(2025, 1, 1))], punches)

    container = create_engine(schedules=repo, punches=repo, holidays=repo, requests=repo)
    report = container.period_report_service.build_report(user_id=1, start=date(2025, 3, 3), end=date(2025, 3, 9))
    print(report.summary)
    report.to_excel("reporte_asistencia.xlsx")


if __name__ == "__main__":
    main()
