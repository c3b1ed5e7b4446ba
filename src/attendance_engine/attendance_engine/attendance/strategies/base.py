from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass

from ...core.enums import DayStatus


@dataclass(frozen=True)
class CompensationDecision:
    compensated: bool
    net_late_minutes: int
    net_extra_minutes: int
    status: DayStatus
    message: str


class CompensationStrategy(ABC):
    """Strategy Pattern: encapsulate how lateness is settled against overtime."""

    @abstractmethod
    def decide(self, *, minutes_late: int, minutes_extra: int) -> CompensationDecision:
        raise NotImplementedError

    @staticmethod
    def punctual(minutes_extra: int) -> CompensationDecision:
        message = "Asistencia puntual"
        if minutes_extra > 0:
            message = f"Asistencia puntual con {minutes_extra} min de tiempo extra"
        return CompensationDecision(
            compensated=False,
            net_late_minutes=0,
            net_extra_minutes=minutes_extra,
            status=DayStatus.PUNCTUAL,
            message=message,
        )
