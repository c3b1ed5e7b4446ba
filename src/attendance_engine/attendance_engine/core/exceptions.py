class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class ConfigurationError(DomainError):
    """Raised when a schedule cannot be used without administrative correction."""


class NoScheduleAssigned(DomainError):
    """Raised when no assignment covers the requested date."""

    def __init__(self, user_id: int, work_date):
        super().__init__(f"Usuario {user_id} sin horario asignado para {work_date}")
        self.user_id = user_id
        self.work_date = work_date


class InvalidPunchSequence(DomainError):
    """Raised when a punch event is not a valid transition of the day's session."""

    def __init__(self, anomaly, message: str):
        super().__init__(message)
        self.anomaly = anomaly


class NegativeDurationError(DomainError):
    """Raised when an interval ends before it starts."""
