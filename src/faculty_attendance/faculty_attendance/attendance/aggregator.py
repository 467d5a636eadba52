"""Pure read-side helpers over attendance records.

Nothing here touches the store; callers pass in what they already loaded.
"""

from __future__ import annotations

from collections import defaultdict
from datetime import date
from typing import Any, Iterable, Mapping, Optional, Sequence

from ..common.datetime_utils import in_month, parse_month
from ..core.enums import AttendanceStatus
from ..faculty.model import FacultyRecord
from .model import AttendanceEntry, AttendanceRecord, StatusCounts


def flatten(tree: Optional[Mapping[str, Any]]) -> list[AttendanceRecord]:
    """Turn ``{empId: {records: {date: {...}}}}`` into a flat record list."""

    records: list[AttendanceRecord] = []
    for emp_id, node in (tree or {}).items():
        for day, data in ((node or {}).get("records") or {}).items():
            records.append(AttendanceRecord.from_store(emp_id, day, data))
    records.sort(key=lambda r: (r.emp_id, r.date))
    return records


def records_for_month(records: Iterable[AttendanceRecord], month: str) -> dict[int, list[AttendanceRecord]]:
    """Group a month's records per employee, each list ordered by date.

    Employees without records in the month are absent from the result.
    """

    parse_month(month)
    grouped: dict[int, list[AttendanceRecord]] = defaultdict(list)
    for record in records:
        if in_month(record.date, month):
            grouped[record.emp_id].append(record)
    return {emp_id: sorted(rows, key=lambda r: r.date) for emp_id, rows in grouped.items()}


def to_entries(records: Iterable[AttendanceRecord], faculty: Iterable[FacultyRecord]) -> list[AttendanceEntry]:
    by_id = {f.emp_id: f for f in faculty}
    entries = []
    for r in records:
        member = by_id.get(r.emp_id)
        entries.append(
            AttendanceEntry(
                emp_id=r.emp_id,
                name=member.name if member else f"Unknown ({r.emp_id})",
                dept=member.dept if member else "Unknown",
                date=r.date,
                in_time=r.in_time,
                status=r.status,
                leave_application_id=r.leave_application_id,
            )
        )
    return entries


def filter_entries(
    entries: Iterable[AttendanceEntry],
    *,
    start: date,
    end: date,
    dept: str = "all",
    name: str = "",
) -> list[AttendanceEntry]:
    needle = (name or "").strip().lower()
    return [
        e
        for e in entries
        if start <= e.date <= end
        and (dept == "all" or e.dept == dept)
        and (not needle or needle in e.name.lower())
    ]


def status_counts(entries: Sequence[AttendanceEntry]) -> StatusCounts:
    def count(status: AttendanceStatus) -> int:
        return sum(1 for e in entries if e.status == status)

    return StatusCounts(
        total=len({e.emp_id for e in entries}),
        on_time=count(AttendanceStatus.ON_TIME),
        late=count(AttendanceStatus.LATE),
        absent=count(AttendanceStatus.ABSENT),
        on_duty=count(AttendanceStatus.ON_DUTY),
    )
