from __future__ import annotations

from dataclasses import dataclass

from ..schedules.model import ResolvedDay
from .strategies.base import CompensationStrategy
from .strategies.no_compensation_strategy import NoCompensationStrategy
from .strategies.offset_strategy import OffsetCompensationStrategy


@dataclass
class CompensationStrategyFactory:
    """Factory Pattern: choose the compensation strategy for a resolved day."""

    def for_day(self, resolved: ResolvedDay) -> CompensationStrategy:
        if resolved.is_working and resolved.allow_compensation:
            return OffsetCompensationStrategy()
        return NoCompensationStrategy()
