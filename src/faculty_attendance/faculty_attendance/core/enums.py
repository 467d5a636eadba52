from __future__ import annotations

from enum import Enum


class AttendanceStatus(str, Enum):
    """Attendance status as stored under attendance/{empId}/records/{date}."""

    ON_TIME = "On Time"
    LATE = "Late"
    ABSENT = "Absent"
    ON_DUTY = "On Duty"


class LeaveStatus(str, Enum):
    """Leave application approval state."""

    PENDING = "Pending"
    APPROVED = "Approved"
    REJECTED = "Rejected"


class ManualMark(str, Enum):
    """Marks an administrator can apply from the manual attendance screen."""

    PRESENT = "Present"
    LEAVE = "Leave"
    ON_DUTY = "On Duty"
