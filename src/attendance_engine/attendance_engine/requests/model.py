from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, time
from typing import Optional

from ..core.enums import PunchType, RequestStatus


@dataclass(frozen=True)
class Absence:
    absence_id: int
    user_id: int
    start_date: date
    end_date: date
    absence_type: str
    status: RequestStatus
    note: Optional[str] = None
    created_at: Optional[datetime] = None
    decided_by: Optional[int] = None
    decided_at: Optional[datetime] = None

    @property
    def is_approved(self) -> bool:
        return self.status == RequestStatus.APPROVED

    def covers(self, work_date: date) -> bool:
        return self.start_date <= work_date <= self.end_date


@dataclass(frozen=True)
class Correction:
    """Requested replacement of the entry or exit time of one day."""

    correction_id: int
    user_id: int
    work_date: date
    punch_type: PunchType
    requested_time: time
    reason: str
    status: RequestStatus
    created_at: Optional[datetime] = None
    reviewed_by: Optional[int] = None
    reviewed_at: Optional[datetime] = None

    @property
    def is_approved(self) -> bool:
        return self.status == RequestStatus.APPROVED
