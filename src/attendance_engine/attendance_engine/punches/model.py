from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta
from decimal import Decimal
from typing import Optional

from ..core.enums import Anomaly, PunchType, SessionState
from ..payroll.model import LegalPremiums


@dataclass(frozen=True)
class Punch:
    """Marcación: one clock-in/out record, optionally carrying the day's lunch marks."""

    punch_id: Optional[int]
    user_id: int
    timestamp: datetime
    punch_type: PunchType
    lunch_start: Optional[datetime] = None
    lunch_end: Optional[datetime] = None
    latitude: Optional[Decimal] = None
    longitude: Optional[Decimal] = None
    premiums: Optional[LegalPremiums] = None
    premiums_computed: bool = False
    premiums_exit: Optional[datetime] = None


@dataclass(frozen=True)
class PunchSession:
    """One reconciled work session for a day."""

    entry: Optional[datetime] = None
    exit: Optional[datetime] = None
    lunch_start: Optional[datetime] = None
    lunch_end: Optional[datetime] = None
    state: SessionState = SessionState.NO_ENTRY
    entry_punch_id: Optional[int] = None
    anomalies: tuple[Anomaly, ...] = ()

    @property
    def has_punches(self) -> bool:
        return self.entry is not None or self.exit is not None

    @property
    def is_complete(self) -> bool:
        return self.entry is not None and self.exit is not None

    @property
    def has_lunch(self) -> bool:
        return self.lunch_start is not None and self.lunch_end is not None

    @property
    def lunch_minutes(self) -> Optional[int]:
        """Measured lunch, or None when the lunch marks are absent or unusable."""
        if not self.has_lunch:
            return None
        return int((self.lunch_end - self.lunch_start) / timedelta(minutes=1))
