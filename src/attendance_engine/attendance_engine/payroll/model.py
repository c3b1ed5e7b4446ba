from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class LegalPremiums:
    """Recargos: minutes falling in each legal premium category.

    ``total_minutes``/``total_hours`` are derived so they can never disagree with the parts.
    """

    day_overtime_minutes: int = 0
    night_overtime_minutes: int = 0
    night_ordinary_minutes: int = 0

    @property
    def total_minutes(self) -> int:
        return self.day_overtime_minutes + self.night_overtime_minutes + self.night_ordinary_minutes

    @property
    def day_overtime_hours(self) -> float:
        return self.day_overtime_minutes / 60

    @property
    def night_overtime_hours(self) -> float:
        return self.night_overtime_minutes / 60

    @property
    def night_ordinary_hours(self) -> float:
        return self.night_ordinary_minutes / 60

    @property
    def total_hours(self) -> float:
        return self.total_minutes / 60
