from __future__ import annotations

from ...core.enums import DayStatus
from .base import CompensationDecision, CompensationStrategy


class NoCompensationStrategy(CompensationStrategy):
    """Lateness and overtime are reported unchanged."""

    def decide(self, *, minutes_late: int, minutes_extra: int) -> CompensationDecision:
        if minutes_late <= 0:
            return self.punctual(minutes_extra)

        return CompensationDecision(
            compensated=False,
            net_late_minutes=minutes_late,
            net_extra_minutes=minutes_extra,
            status=DayStatus.LATE_UNCOMPENSATED,
            message=f"Tardanza de {minutes_late} min (sin compensación)",
        )
