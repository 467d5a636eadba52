from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Any, Mapping, Optional

from ..common.datetime_utils import parse_iso_date
from ..core.enums import AttendanceStatus


@dataclass(frozen=True)
class AttendanceRecord:
    """Domain entity: one attendance entry per (emp_id, date)."""

    emp_id: int
    date: date
    in_time: str
    status: AttendanceStatus
    leave_application_id: Optional[str] = None

    @classmethod
    def from_store(cls, emp_id: int | str, day: str, data: Mapping[str, Any]) -> "AttendanceRecord":
        return cls(
            emp_id=int(emp_id),
            date=parse_iso_date(day),
            in_time=str(data.get("inTime") or "00:00:00"),
            status=AttendanceStatus(data["status"]),
            leave_application_id=data.get("leaveApplicationId"),
        )

    def to_store(self) -> dict[str, Any]:
        data: dict[str, Any] = {"inTime": self.in_time, "status": self.status.value}
        if self.leave_application_id:
            data["leaveApplicationId"] = self.leave_application_id
        return data


@dataclass(frozen=True)
class AttendanceEntry:
    """Read-model for listings: a record joined with the faculty name/dept."""

    emp_id: int
    name: str
    dept: str
    date: date
    in_time: str
    status: AttendanceStatus
    leave_application_id: Optional[str] = None

    @property
    def id(self) -> str:
        return f"{self.date.isoformat()}-{self.emp_id}"


@dataclass(frozen=True)
class StatusCounts:
    total: int
    on_time: int
    late: int
    absent: int
    on_duty: int


@dataclass(frozen=True)
class MonthStats:
    on_time: int
    late: int
    absent: int
    on_duty: int
    present: int
    cl_used_this_month: int
    unpaid_leave: int
    applied_leave: int


@dataclass(frozen=True)
class RosterRow:
    emp_id: int
    name: str
    dept: str
    status: str
    in_time: Optional[str] = None


@dataclass(frozen=True)
class ImportResult:
    uploaded: int
    skipped_ids: tuple = ()

    @property
    def message(self) -> str:
        if self.skipped_ids:
            skipped = ", ".join(str(i) for i in self.skipped_ids)
            return f"Uploaded {self.uploaded} records. Skipped invalid IDs: {skipped}"
        return f"Successfully uploaded {self.uploaded} records."
