from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..common.datetime_utils import normalize_time
from ..core.constants import ABSENT_IN_TIME
from .strategies.absent_strategy import AbsentStrategy
from .strategies.base import AttendanceStrategy, StatusDecision
from .strategies.late_strategy import LateStrategy
from .strategies.normal_strategy import NormalStrategy


@dataclass
class AttendanceStrategyFactory:
    """Factory Pattern: choose appropriate strategy based on rules."""

    def for_in_time(self, *, in_time: str, threshold: str) -> AttendanceStrategy:
        # Both sides are HH:MM:SS, so string order is time order.
        if in_time == ABSENT_IN_TIME:
            return AbsentStrategy()
        if in_time <= threshold:
            return NormalStrategy()
        return LateStrategy()


def classify(raw_in_time: object, threshold: str, *, factory: Optional[AttendanceStrategyFactory] = None) -> StatusDecision:
    in_time = normalize_time(raw_in_time)
    factory = factory or AttendanceStrategyFactory()
    strategy = factory.for_in_time(in_time=in_time, threshold=normalize_time(threshold))
    return strategy.decide(in_time=in_time)
