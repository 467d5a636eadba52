from __future__ import annotations

from ...core.constants import ABSENT_IN_TIME
from ...core.enums import AttendanceStatus
from .base import AttendanceStrategy, StatusDecision


class AbsentStrategy(AttendanceStrategy):
    """No punch-in recorded (in-time 00:00:00)."""

    def decide(self, *, in_time: str) -> StatusDecision:
        return StatusDecision(status=AttendanceStatus.ABSENT, in_time=ABSENT_IN_TIME)
