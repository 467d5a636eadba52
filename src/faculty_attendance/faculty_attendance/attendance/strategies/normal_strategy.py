from __future__ import annotations

from ...core.enums import AttendanceStatus
from .base import AttendanceStrategy, StatusDecision


class NormalStrategy(AttendanceStrategy):
    """Arrived at or before the on-time threshold."""

    def decide(self, *, in_time: str) -> StatusDecision:
        return StatusDecision(status=AttendanceStatus.ON_TIME, in_time=in_time)
