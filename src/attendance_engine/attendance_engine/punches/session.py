from __future__ import annotations

import logging
from dataclasses import replace
from datetime import datetime
from typing import Iterable, Optional

from ..common.datetime_utils import to_local
from ..core.constants import DEFAULT_LOCAL_TIMEZONE
from ..core.enums import Anomaly, PunchType, SessionState
from ..core.exceptions import InvalidPunchSequence
from .model import Punch, PunchSession

logger = logging.getLogger(__name__)

# Tie-break for events sharing a timestamp.
_ENTRY, _LUNCH_START, _LUNCH_END, _EXIT = range(4)


class PunchSessionBuilder:
    """State machine for a single day's session.

    NO_ENTRY -> AWAITING_LUNCH -> LUNCH_IN_PROGRESS -> LUNCH_COMPLETED -> HAS_EXIT,
    with any state allowed to jump to HAS_EXIT. Guarded methods raise
    ``InvalidPunchSequence`` on transitions that would leave the session inconsistent.
    """

    def __init__(self):
        self._state = SessionState.NO_ENTRY
        self._entry: Optional[datetime] = None
        self._exit: Optional[datetime] = None
        self._lunch_start: Optional[datetime] = None
        self._lunch_end: Optional[datetime] = None
        self._entry_punch_id: Optional[int] = None
        self._anomalies: list[Anomaly] = []

    @property
    def state(self) -> SessionState:
        return self._state

    def register_entry(self, at: datetime, *, punch_id: Optional[int] = None) -> None:
        if self._entry is not None:
            raise InvalidPunchSequence(Anomaly.DUPLICATE_ENTRY, f"Entrada repetida a las {at:%H:%M}")

        self._entry = at
        self._entry_punch_id = punch_id
        if self._state == SessionState.NO_ENTRY:
            self._state = SessionState.AWAITING_LUNCH
        else:
            # exit already seen (clock skew); the session stays closed
            self._anomalies.append(Anomaly.EXIT_BEFORE_ENTRY)

    def start_lunch(self, at: datetime) -> None:
        if self._lunch_start is not None:
            raise InvalidPunchSequence(Anomaly.DUPLICATE_LUNCH_START, "El almuerzo ya fue iniciado")
        if self._state != SessionState.AWAITING_LUNCH:
            raise InvalidPunchSequence(
                Anomaly.LUNCH_START_OUTSIDE_SHIFT,
                f"Inicio de almuerzo en estado {self._state.value}",
            )

        self._lunch_start = at
        self._state = SessionState.LUNCH_IN_PROGRESS

    def end_lunch(self, at: datetime) -> None:
        if self._lunch_start is None:
            raise InvalidPunchSequence(Anomaly.LUNCH_END_WITHOUT_START, "Fin de almuerzo sin inicio")
        if self._state != SessionState.LUNCH_IN_PROGRESS or at < self._lunch_start:
            raise InvalidPunchSequence(
                Anomaly.LUNCH_END_OUTSIDE_SHIFT,
                f"Fin de almuerzo en estado {self._state.value}",
            )

        self._lunch_end = at
        self._state = SessionState.LUNCH_COMPLETED

    def register_exit(self, at: datetime) -> None:
        if self._state == SessionState.LUNCH_IN_PROGRESS:
            self._anomalies.append(Anomaly.LUNCH_NOT_CLOSED)

        # last exit wins
        self._exit = at
        self._state = SessionState.HAS_EXIT

    def flag(self, anomaly: Anomaly) -> None:
        self._anomalies.append(anomaly)

    def build(self) -> PunchSession:
        lunch_start, lunch_end = self._lunch_start, self._lunch_end
        if lunch_start is None or lunch_end is None:
            # An unclosed lunch is not authoritative; fall back to the schedule's lunch.
            lunch_start, lunch_end = None, None

        return PunchSession(
            entry=self._entry,
            exit=self._exit,
            lunch_start=lunch_start,
            lunch_end=lunch_end,
            state=self._state,
            entry_punch_id=self._entry_punch_id,
            anomalies=tuple(self._anomalies),
        )


def _events(punches: Iterable[Punch], timezone_name: str):
    out = []
    for p in punches:
        ts = to_local(p.timestamp, timezone_name)
        if p.punch_type == PunchType.ENTRY:
            out.append((ts, _ENTRY, p.punch_id))
        else:
            out.append((ts, _EXIT, p.punch_id))
        if p.lunch_start is not None:
            out.append((to_local(p.lunch_start, timezone_name), _LUNCH_START, p.punch_id))
        if p.lunch_end is not None:
            out.append((to_local(p.lunch_end, timezone_name), _LUNCH_END, p.punch_id))

    out.sort(key=lambda e: (e[0], e[1]))
    return out


def build_session(punches: Iterable[Punch], *, timezone_name: str = DEFAULT_LOCAL_TIMEZONE) -> PunchSession:
    """Replay a day's punches chronologically through ``PunchSessionBuilder``.

    Rejected transitions are recorded as anomalies on the session instead of
    aborting the day.
    """
    builder = PunchSessionBuilder()
    for at, kind, punch_id in _events(punches, timezone_name):
        try:
            if kind == _ENTRY:
                builder.register_entry(at, punch_id=punch_id)
            elif kind == _LUNCH_START:
                builder.start_lunch(at)
            elif kind == _LUNCH_END:
                builder.end_lunch(at)
            else:
                builder.register_exit(at)
        except InvalidPunchSequence as e:
            logger.warning("Punch anomaly at %s: %s", at.isoformat(), e)
            builder.flag(e.anomaly)

    session = builder.build()
    logger.debug("Session built state=%s anomalies=%s", session.state.value, [a.value for a in session.anomalies])
    return session


def localize(punches: Iterable[Punch], timezone_name: str) -> list[Punch]:
    """Bring every timestamp of ``punches`` into naive local time."""
    out = []
    for p in punches:
        out.append(
            replace(
                p,
                timestamp=to_local(p.timestamp, timezone_name),
                lunch_start=to_local(p.lunch_start, timezone_name) if p.lunch_start else None,
                lunch_end=to_local(p.lunch_end, timezone_name) if p.lunch_end else None,
            )
        )
    return out
