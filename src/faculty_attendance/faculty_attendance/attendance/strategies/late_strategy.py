from __future__ import annotations

from ...core.enums import AttendanceStatus
from .base import AttendanceStrategy, StatusDecision


class LateStrategy(AttendanceStrategy):
    """Arrived after the threshold."""

    def decide(self, *, in_time: str) -> StatusDecision:
        return StatusDecision(status=AttendanceStatus.LATE, in_time=in_time)
