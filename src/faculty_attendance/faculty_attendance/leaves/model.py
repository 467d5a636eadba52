from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Any, Mapping

from ..common.datetime_utils import parse_iso_date
from ..core.enums import LeaveStatus


@dataclass(frozen=True)
class LeaveApplication:
    """Domain entity: a leave request covering [start_date, end_date]."""

    id: str
    emp_id: int
    start_date: date
    end_date: date
    submission_timestamp: datetime
    status: LeaveStatus = LeaveStatus.PENDING
    reason: str = ""

    @classmethod
    def from_store(cls, leave_id: str, data: Mapping[str, Any]) -> "LeaveApplication":
        return cls(
            id=str(data.get("id") or leave_id),
            emp_id=int(data["empId"]),
            start_date=parse_iso_date(data["startDate"]),
            end_date=parse_iso_date(data["endDate"]),
            submission_timestamp=datetime.fromisoformat(data["submissionTimestamp"]),
            status=LeaveStatus(data.get("status") or LeaveStatus.PENDING.value),
            reason=str(data.get("reason") or ""),
        )

    def to_store(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "empId": self.emp_id,
            "startDate": self.start_date.isoformat(),
            "endDate": self.end_date.isoformat(),
            "submissionTimestamp": self.submission_timestamp.isoformat(),
            "status": self.status.value,
            "reason": self.reason,
        }
