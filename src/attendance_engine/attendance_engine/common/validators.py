from __future__ import annotations

from typing import Optional

from ..core.exceptions import ConfigurationError


def require_non_negative(value: Optional[int], field_name: str) -> int:
    if value is None or int(value) < 0:
        raise ConfigurationError(f"{field_name} no puede ser negativo")
    return int(value)
