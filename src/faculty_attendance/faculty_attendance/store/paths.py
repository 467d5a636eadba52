"""Path builders for the record store layout."""

from __future__ import annotations

from datetime import date

FACULTY = "faculty"
ATTENDANCE = "attendance"
LEAVE_APPLICATIONS = "leaveApplications"
HOLIDAYS = "holidays"
MONTHLY_ALLOCATIONS = "monthlyAllocations"
SETTINGS = "settings"


def split(path: str) -> list[str]:
    parts = [p for p in str(path).strip("/").split("/") if p]
    if not parts:
        raise ValueError("Record path cannot be empty")
    return parts


def faculty(emp_id: int) -> str:
    return f"{FACULTY}/{int(emp_id)}"


def faculty_casual_leaves(emp_id: int) -> str:
    return f"{faculty(emp_id)}/casualLeaves"


def attendance(emp_id: int) -> str:
    return f"{ATTENDANCE}/{int(emp_id)}"


def attendance_records(emp_id: int) -> str:
    return f"{attendance(emp_id)}/records"


def attendance_record(emp_id: int, day: date) -> str:
    return f"{attendance_records(emp_id)}/{day.isoformat()}"


def leave_application(leave_id: str) -> str:
    return f"{LEAVE_APPLICATIONS}/{leave_id}"


def holiday(day: date) -> str:
    return f"{HOLIDAYS}/{day.isoformat()}"


def monthly_allocation(month: str) -> str:
    return f"{MONTHLY_ALLOCATIONS}/{month}"
