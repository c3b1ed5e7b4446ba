from __future__ import annotations

from datetime import datetime, time, timedelta
from zoneinfo import ZoneInfo

from ..core.exceptions import ConfigurationError


def parse_hhmm(value: str | time) -> time:
    """Parse HH:MM string into time."""
    if isinstance(value, time):
        return value
    try:
        return datetime.strptime(value.strip(), "%H:%M").time()
    except ValueError:
        raise ConfigurationError(f"Hora no válida (HH:MM): {value!r}")


def to_local(value: datetime, timezone_name: str) -> datetime:
    """Convert an aware datetime into naive local time.

    Naive values are assumed to be local already.
    """
    if value.tzinfo is None:
        return value
    return value.astimezone(ZoneInfo(timezone_name)).replace(tzinfo=None)


def whole_minutes(delta: timedelta) -> int:
    return int(delta.total_seconds() // 60)


def round_up(value: datetime, granularity_minutes: int) -> datetime:
    """Snap forward to the next grid line counted from midnight (0 disables)."""
    if granularity_minutes <= 0:
        return value
    midnight = datetime.combine(value.date(), time.min)
    step = timedelta(minutes=granularity_minutes)
    remainder = (value - midnight) % step
    if not remainder:
        return value
    return value + (step - remainder)


def round_down(value: datetime, granularity_minutes: int) -> datetime:
    """Snap back to the previous grid line counted from midnight (0 disables)."""
    if granularity_minutes <= 0:
        return value
    midnight = datetime.combine(value.date(), time.min)
    step = timedelta(minutes=granularity_minutes)
    return value - ((value - midnight) % step)
