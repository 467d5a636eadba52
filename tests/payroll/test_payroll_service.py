from __future__ import annotations

from decimal import Decimal

import pytest

from faculty_attendance.core.exceptions import ValidationError
from faculty_attendance.payroll.model import PayrollSheet


def test_build_sheet_reads_store_and_settings(container, store, put_attendance):
    store.set("holidays/2025-02-03", {"date": "2025-02-03", "description": "Festival"})
    for day in range(4, 8):
        put_attendance(1, f"2025-02-0{day}", "Late", in_time="09:00:00")
    store.set("settings", {"permissionLimit": 1})
    container.settings.load()

    sheet = container.payroll_service.build_sheet("2025-02")

    assert sheet.holidays_in_month == 1
    assert sheet.working_days == 27
    row = sheet.row(1)
    assert row.permissions == 1
    assert row.half_day_leaves == 3


def test_update_payable_days_returns_new_sheet(container):
    sheet = container.payroll_service.build_sheet("2025-02", calendar_days=10)

    updated = container.payroll_service.update_payable_days(sheet, 2, "5")

    assert updated.row(2).payable_days == Decimal("5")
    assert updated.row(2).calculated_salary == Decimal("1000.00")
    assert sheet.row(2).calculated_salary == Decimal("0.00")


def test_finalize_deducts_used_casual_leave_each_time(container, store, put_attendance):
    store.set("faculty/1/casualLeaves", 5)
    put_attendance(1, "2025-02-01", "On Time")
    sheet = container.payroll_service.build_sheet("2025-02", calendar_days=3)
    assert sheet.row(1).casual_leaves_used == 2

    changed = container.payroll_service.finalize(sheet)

    # faculty 3 has one CL and is absent all three days
    assert changed == 2
    assert store.get("faculty/1/casualLeaves") == 3
    assert store.get("faculty/3/casualLeaves") == 0
    assert store.get("faculty/2/casualLeaves") == 0

    container.payroll_service.finalize(sheet)

    assert store.get("faculty/1/casualLeaves") == 1
    assert store.get("faculty/3/casualLeaves") == 0


def test_finalize_without_deductions_writes_nothing(container, store, put_attendance):
    for emp_id in (1, 2, 3):
        put_attendance(emp_id, "2025-02-01", "On Time")
    sheet = container.payroll_service.build_sheet("2025-02", calendar_days=1)
    before = store.dump()

    assert container.payroll_service.finalize(sheet) == 0
    assert store.dump() == before


def test_finalize_empty_sheet_is_rejected(container):
    empty = PayrollSheet(month="2025-02", total_days=28, holidays_in_month=0, working_days=28)

    with pytest.raises(ValidationError) as err:
        container.payroll_service.finalize(empty)

    assert err.value.message == "No summary data to process."
