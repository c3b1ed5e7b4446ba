from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from ..core.enums import RequestStatus
from .model import Absence, Correction


class RequestRepository(Protocol):
    def list_absences(
        self,
        *,
        user_id: int,
        start: date,
        end: date,
        status: Optional[RequestStatus] = None,
    ) -> Sequence[Absence]:
        """Absences of ``user_id`` intersecting ``[start, end]``."""

        raise NotImplementedError

    def list_corrections(
        self,
        *,
        user_id: int,
        start: date,
        end: date,
        status: Optional[RequestStatus] = None,
    ) -> Sequence[Correction]:
        raise NotImplementedError
