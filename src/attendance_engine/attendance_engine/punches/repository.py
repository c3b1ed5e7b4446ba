from __future__ import annotations

from datetime import datetime
from typing import Protocol, Sequence

from ..payroll.model import LegalPremiums
from .model import Punch


class PunchRepository(Protocol):
    def list_between(self, *, user_id: int, start: datetime, end: datetime) -> Sequence[Punch]:
        """Punches of ``user_id`` with ``start <= timestamp < end`` (local time)."""

        raise NotImplementedError

    def save_premiums(self, *, punch_id: int, premiums: LegalPremiums, exit_at: datetime) -> bool:
        """Cache computed premiums on the punch, with the exit they were computed against."""

        raise NotImplementedError
