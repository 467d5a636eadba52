from __future__ import annotations

from dataclasses import replace
from datetime import date

import pytest

from faculty_attendance.core.enums import AttendanceStatus, ManualMark
from faculty_attendance.core.exceptions import NotFoundError, ValidationError


def test_import_classifies_rows_and_skips_unknown_ids(container, store):
    rows = [
        {"Emp ID": 1, "In Time": "08:10"},
        {"Emp ID": 2, "In Time": "09:00:00"},
        {"Emp ID": 99, "In Time": "08:00"},
        {"Emp ID": 3, "In Time": ""},
    ]

    result = container.attendance_service.import_rows(rows, date(2025, 3, 3))

    assert result.uploaded == 3
    assert result.skipped_ids == (99,)
    assert result.message == "Uploaded 3 records. Skipped invalid IDs: 99"
    assert store.get("attendance/1/records/2025-03-03") == {"inTime": "08:10:00", "status": "On Time"}
    assert store.get("attendance/2/records/2025-03-03/status") == "Late"
    assert store.get("attendance/3/records/2025-03-03") == {"inTime": "00:00:00", "status": "Absent"}


def test_import_uses_the_configured_threshold(container, store):
    container.settings.update(replace(container.settings.current, on_time_threshold="09:30:00"))

    container.attendance_service.import_rows([{"empid": 2, "intime": "09:00"}], date(2025, 3, 3))

    assert store.get("attendance/2/records/2025-03-03/status") == "On Time"


def test_import_without_valid_ids_writes_nothing(container, store):
    with pytest.raises(ValidationError) as err:
        container.attendance_service.import_rows([{"Emp ID": 42, "In Time": "08:00"}], date(2025, 3, 3))

    assert err.value.message == "Invalid Employee IDs: 42"
    assert store.get("attendance") is None


def test_import_without_rows_is_rejected(container):
    with pytest.raises(ValidationError):
        container.attendance_service.import_rows([], date(2025, 3, 3))


def test_manual_marks(container, store):
    service = container.attendance_service

    service.mark_manual(1, date(2025, 3, 4), ManualMark.PRESENT)
    service.mark_manual(2, date(2025, 3, 4), ManualMark.LEAVE)
    service.mark_manual(3, date(2025, 3, 4), "On Duty")

    assert store.get("attendance/1/records/2025-03-04") == {"inTime": "08:00:00", "status": "On Time"}
    assert store.get("attendance/2/records/2025-03-04") == {"inTime": "00:00:00", "status": "Absent"}
    assert store.get("attendance/3/records/2025-03-04") == {"inTime": "00:00:00", "status": "On Duty"}


def test_manual_mark_keeps_the_punch_time_of_a_late_day(container, store, put_attendance):
    put_attendance(1, "2025-03-04", "Late", in_time="09:12:00")

    record = container.attendance_service.mark_manual(1, date(2025, 3, 4), ManualMark.ON_DUTY)

    assert record.status == AttendanceStatus.ON_DUTY
    assert store.get("attendance/1/records/2025-03-04") == {"inTime": "09:12:00", "status": "On Duty"}


def test_manual_mark_validation(container):
    with pytest.raises(ValidationError):
        container.attendance_service.mark_manual(1, date(2025, 3, 4), "Holiday")
    with pytest.raises(NotFoundError):
        container.attendance_service.mark_manual(99, date(2025, 3, 4), ManualMark.PRESENT)


def test_daily_roster_lists_unmarked_first(container, put_attendance):
    put_attendance(1, "2025-03-04", "Late", in_time="09:00:00")
    put_attendance(3, "2025-03-04", "On Time")

    roster = container.attendance_service.daily_roster(date(2025, 3, 4))

    assert [(r.emp_id, r.status) for r in roster] == [(2, "Not Marked"), (1, "Late"), (3, "On Time")]
    assert roster[0].in_time is None


def test_month_stats(container, put_attendance):
    put_attendance(1, "2025-03-03", "On Time")
    put_attendance(1, "2025-03-04", "Late", in_time="09:00:00")
    put_attendance(1, "2025-03-05", "Absent", in_time="00:00:00", leave_id="L1")
    put_attendance(1, "2025-03-06", "Absent", in_time="00:00:00")
    put_attendance(1, "2025-03-07", "Absent", in_time="00:00:00")
    put_attendance(1, "2025-02-27", "Absent", in_time="00:00:00")

    stats = container.attendance_service.month_stats(1, "2025-03")

    assert (stats.on_time, stats.late, stats.absent, stats.on_duty) == (1, 1, 3, 0)
    assert stats.present == 2
    assert stats.cl_used_this_month == 2
    assert stats.unpaid_leave == 1
    assert stats.applied_leave == 1


def test_entries_join_faculty_names(container, put_attendance):
    put_attendance(2, "2025-03-04", "On Time")
    put_attendance(2, "2025-04-04", "On Time")

    entries = container.attendance_service.entries(start=date(2025, 3, 1), end=date(2025, 3, 31))

    assert [(e.name, e.date) for e in entries] == [("Bala", date(2025, 3, 4))]
