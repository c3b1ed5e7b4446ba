from __future__ import annotations

from dataclasses import dataclass
from datetime import time
from types import ModuleType

from ..common.datetime_utils import parse_hhmm
from ..common.validators import require_non_negative
from .constants import (
    DEFAULT_DAY_START,
    DEFAULT_LOCAL_TIMEZONE,
    DEFAULT_NIGHT_START,
    DEFAULT_ROUNDING_MINUTES,
    DEFAULT_TOLERANCE_MINUTES,
)
from .exceptions import ConfigurationError


@dataclass(frozen=True)
class EngineConfig:
    """System-wide defaults passed explicitly into the resolver and calculators."""

    default_tolerance_minutes: int = DEFAULT_TOLERANCE_MINUTES
    default_rounding_minutes: int = DEFAULT_ROUNDING_MINUTES
    day_start: time = DEFAULT_DAY_START
    night_start: time = DEFAULT_NIGHT_START
    local_timezone: str = DEFAULT_LOCAL_TIMEZONE

    def __post_init__(self):
        require_non_negative(self.default_tolerance_minutes, "DEFAULT_TOLERANCE_MINUTES")
        require_non_negative(self.default_rounding_minutes, "DEFAULT_ROUNDING_MINUTES")
        if self.day_start >= self.night_start:
            raise ConfigurationError("DAY_START debe ser anterior a NIGHT_START")

    @classmethod
    def from_settings(cls, settings: ModuleType) -> "EngineConfig":
        return cls(
            default_tolerance_minutes=int(getattr(settings, "DEFAULT_TOLERANCE_MINUTES", DEFAULT_TOLERANCE_MINUTES)),
            default_rounding_minutes=int(getattr(settings, "DEFAULT_ROUNDING_MINUTES", DEFAULT_ROUNDING_MINUTES)),
            day_start=parse_hhmm(getattr(settings, "DAY_START", "06:00")),
            night_start=parse_hhmm(getattr(settings, "NIGHT_START", "21:00")),
            local_timezone=str(getattr(settings, "LOCAL_TIMEZONE", DEFAULT_LOCAL_TIMEZONE)),
        )
