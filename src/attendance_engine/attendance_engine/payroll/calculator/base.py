from __future__ import annotations

from abc import ABC, abstractmethod

from ...punches.model import PunchSession
from ...schedules.model import ResolvedDay
from ..model import LegalPremiums


class PremiumCalculator(ABC):
    """Calculator interface (Strategy Pattern for legal premiums)."""

    @abstractmethod
    def compute(self, resolved: ResolvedDay, session: PunchSession) -> LegalPremiums:
        raise NotImplementedError
