from __future__ import annotations

from ...core.enums import DayStatus
from .base import CompensationDecision, CompensationStrategy


class OffsetCompensationStrategy(CompensationStrategy):
    """Lateness is paid down first from the same day's overtime pool."""

    def decide(self, *, minutes_late: int, minutes_extra: int) -> CompensationDecision:
        if minutes_late <= 0:
            return self.punctual(minutes_extra)

        if minutes_extra <= 0:
            return CompensationDecision(
                compensated=False,
                net_late_minutes=minutes_late,
                net_extra_minutes=0,
                status=DayStatus.LATE_UNCOMPENSATED,
                message=f"Tardanza de {minutes_late} min sin tiempo extra para compensar",
            )

        net_late = max(0, minutes_late - minutes_extra)
        net_extra = max(0, minutes_extra - minutes_late)
        if minutes_extra >= minutes_late:
            return CompensationDecision(
                compensated=True,
                net_late_minutes=net_late,
                net_extra_minutes=net_extra,
                status=DayStatus.LATE_COMPENSATED,
                message=f"Tardanza de {minutes_late} min compensada con tiempo extra",
            )

        return CompensationDecision(
            compensated=False,
            net_late_minutes=net_late,
            net_extra_minutes=net_extra,
            status=DayStatus.LATE_UNCOMPENSATED,
            message=f"Tardanza parcialmente compensada. Quedan {net_late} min",
        )
