from __future__ import annotations

from datetime import date
from decimal import Decimal

from faculty_attendance.attendance import aggregator
from faculty_attendance.attendance.model import AttendanceRecord
from faculty_attendance.core.enums import AttendanceStatus
from faculty_attendance.faculty.model import FacultyRecord


def _rec(emp_id, day, status=AttendanceStatus.ON_TIME):
    return AttendanceRecord(emp_id=emp_id, date=day, in_time="08:00:00", status=status)


def test_flatten_reads_nested_tree():
    tree = {
        "2": {"records": {"2025-03-04": {"inTime": "09:00:00", "status": "Late"}}},
        "1": {"records": {"2025-03-05": {"inTime": "00:00:00", "status": "Absent", "leaveApplicationId": "L1"}}},
    }

    records = aggregator.flatten(tree)

    assert [(r.emp_id, r.date, r.status) for r in records] == [
        (1, date(2025, 3, 5), AttendanceStatus.ABSENT),
        (2, date(2025, 3, 4), AttendanceStatus.LATE),
    ]
    assert records[0].leave_application_id == "L1"
    assert aggregator.flatten(None) == []


def test_records_for_month_groups_and_sorts():
    records = [
        _rec(1, date(2025, 3, 10)),
        _rec(1, date(2025, 3, 2)),
        _rec(2, date(2025, 2, 28)),
        _rec(1, date(2025, 4, 1)),
    ]

    grouped = aggregator.records_for_month(records, "2025-03")

    assert list(grouped) == [1]
    assert [r.date.day for r in grouped[1]] == [2, 10]
    assert len(records) == 4


def test_entries_for_unknown_employee_are_labelled():
    faculty = [FacultyRecord(1, "Asha", "CSE", "Professor", Decimal("3000"))]
    entries = aggregator.to_entries([_rec(1, date(2025, 3, 1)), _rec(7, date(2025, 3, 1))], faculty)

    assert entries[0].name == "Asha"
    assert entries[1].name == "Unknown (7)"
    assert entries[0].id == "2025-03-01-1"


def test_filter_and_count_entries():
    faculty = [
        FacultyRecord(1, "Asha", "CSE", "Professor", Decimal("3000")),
        FacultyRecord(2, "Bala", "ECE", "Lecturer", Decimal("2000")),
    ]
    records = [
        _rec(1, date(2025, 3, 1)),
        _rec(1, date(2025, 3, 2), AttendanceStatus.LATE),
        _rec(2, date(2025, 3, 2), AttendanceStatus.ABSENT),
        _rec(2, date(2025, 3, 9), AttendanceStatus.ON_DUTY),
    ]
    entries = aggregator.to_entries(records, faculty)

    window = aggregator.filter_entries(entries, start=date(2025, 3, 1), end=date(2025, 3, 5))
    counts = aggregator.status_counts(window)

    assert (counts.total, counts.on_time, counts.late, counts.absent, counts.on_duty) == (2, 1, 1, 1, 0)
    assert len(aggregator.filter_entries(entries, start=date(2025, 3, 1), end=date(2025, 3, 31), dept="ECE")) == 2
    assert len(aggregator.filter_entries(entries, start=date(2025, 3, 1), end=date(2025, 3, 31), name="ash")) == 2
