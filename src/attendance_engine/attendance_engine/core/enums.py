from __future__ import annotations

from enum import Enum


class PunchType(str, Enum):
    """Tipo de marcación."""

    ENTRY = "entrada"
    EXIT = "salida"


class RequestStatus(str, Enum):
    """Approval state shared by absences and corrections."""

    PENDING = "pendiente"
    APPROVED = "aprobada"
    REJECTED = "rechazada"


class DayKind(str, Enum):
    """Classification of a resolved schedule day."""

    WORKING = "WORKING"
    NON_WORKING = "NON_WORKING"
    HOLIDAY = "HOLIDAY"
    EXCUSED = "EXCUSED"


class SessionState(str, Enum):
    NO_ENTRY = "NO_ENTRY"
    AWAITING_LUNCH = "AWAITING_LUNCH"
    LUNCH_IN_PROGRESS = "LUNCH_IN_PROGRESS"
    LUNCH_COMPLETED = "LUNCH_COMPLETED"
    HAS_EXIT = "HAS_EXIT"


class DayStatus(str, Enum):
    """Outcome of a reconciled attendance day."""

    PUNCTUAL = "PUNTUAL"
    LATE_COMPENSATED = "TARDE_COMPENSADO"
    LATE_UNCOMPENSATED = "TARDE_SIN_COMPENSAR"
    JUSTIFIED_ABSENCE = "AUSENCIA_JUSTIFICADA"
    HOLIDAY = "FERIADO"
    INCOMPLETE = "INCOMPLETO"
    NON_WORKING = "NO_LABORABLE"
    ABSENT = "AUSENTE"


class Anomaly(str, Enum):
    """Data anomalies flagged while reconciling a day."""

    DUPLICATE_ENTRY = "duplicate-entry"
    EXIT_BEFORE_ENTRY = "exit-before-entry"
    DUPLICATE_LUNCH_START = "duplicate-lunch-start"
    LUNCH_START_OUTSIDE_SHIFT = "lunch-start-outside-shift"
    LUNCH_END_WITHOUT_START = "lunch-end-without-start"
    LUNCH_END_OUTSIDE_SHIFT = "lunch-end-outside-shift"
    LUNCH_NOT_CLOSED = "lunch-not-closed"
    NEGATIVE_DURATION = "negative-duration"
    WORK_ON_NON_WORKING_DAY = "work-on-non-working-day"
