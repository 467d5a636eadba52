from __future__ import annotations

import logging
from typing import Optional, Sequence

from ..attendance.aggregator import records_for_month
from ..attendance.model import AttendanceRecord
from ..attendance.repository import AttendanceRepository
from ..common.datetime_utils import days_in_month, in_month
from ..common.validators import require_decimal, require_non_negative_int
from ..core.exceptions import ValidationError
from ..faculty.model import FacultyRecord
from ..faculty.repository import FacultyRepository
from ..holidays.model import Holiday
from ..holidays.repository import HolidayRepository
from ..settings.model import Settings
from ..settings.service import SettingsProvider
from ..store import paths, transaction
from ..store.port import RecordStore
from .calculator.base import PayrollCalculator
from .calculator.standard_calculator import StandardPayrollCalculator
from .model import PayrollSheet

logger = logging.getLogger(__name__)


def summarize(
    faculty: Sequence[FacultyRecord],
    attendance: Sequence[AttendanceRecord],
    holidays: Sequence[Holiday],
    month: str,
    permission_limit: int,
    *,
    calendar_days: Optional[int] = None,
    calculator: Optional[PayrollCalculator] = None,
) -> PayrollSheet:
    """Derive every employee's monthly summary. Pure: reads its arguments only.

    ``calendar_days`` overrides the month's day count (administrator edit);
    by default it is the number of days in ``month``.
    """

    calculator = calculator or StandardPayrollCalculator()
    permission_limit = require_non_negative_int(permission_limit, "Permission limit")

    total_days = days_in_month(month) if calendar_days is None else require_non_negative_int(calendar_days, "Days")
    holidays_in_month = sum(1 for h in holidays if in_month(h.date, month))
    working_days = max(0, total_days - holidays_in_month)

    by_emp = records_for_month(attendance, month)
    rows = tuple(
        calculator.summarize_employee(
            member,
            by_emp.get(member.emp_id, []),
            working_days=working_days,
            permission_limit=permission_limit,
        )
        for member in sorted(faculty, key=lambda f: (f.name, f.emp_id))
    )
    return PayrollSheet(
        month=month,
        total_days=total_days,
        holidays_in_month=holidays_in_month,
        working_days=working_days,
        rows=rows,
    )


class PayrollService:
    def __init__(
        self,
        store: RecordStore,
        faculty: FacultyRepository,
        attendance: AttendanceRepository,
        holidays: HolidayRepository,
        settings: SettingsProvider,
        *,
        calculator: Optional[PayrollCalculator] = None,
    ):
        self._store = store
        self._faculty = faculty
        self._attendance = attendance
        self._holidays = holidays
        self._settings = settings
        self._calculator = calculator or StandardPayrollCalculator()

    def build_sheet(
        self,
        month: str,
        *,
        calendar_days: Optional[int] = None,
        settings: Optional[Settings] = None,
    ) -> PayrollSheet:
        settings = settings or self._settings.current
        return summarize(
            self._faculty.list_all(),
            self._attendance.list_all(),
            self._holidays.list_all(),
            month,
            settings.permission_limit,
            calendar_days=calendar_days,
            calculator=self._calculator,
        )

    def update_payable_days(self, sheet: PayrollSheet, emp_id: int, new_payable_days: object) -> PayrollSheet:
        """Administrative override: reprorate salary from the given payable days.

        Returns a new sheet; the override holds until ``build_sheet`` is called again.
        """

        payable = require_decimal(new_payable_days, "Payable days")
        return sheet.with_payable_days(emp_id, payable, self._calculator.prorate)

    def finalize(self, sheet: PayrollSheet) -> int:
        """Deduct the used casual leaves from each current balance in one write.

        Not guarded against repeats: finalizing the same sheet twice deducts
        twice (balances bottom out at zero). Returns the number of balances changed.
        """

        if not sheet.rows:
            raise ValidationError("No summary data to process.")

        updates: dict[str, int] = {}
        for row in sheet.rows:
            if row.casual_leaves_used <= 0:
                continue
            member = self._faculty.get(row.emp_id)
            if not member:
                logger.warning("payroll finalize month=%s: emp_id=%s no longer exists", sheet.month, row.emp_id)
                continue
            updates[paths.faculty_casual_leaves(row.emp_id)] = max(0, member.casual_leaves - row.casual_leaves_used)

        if not updates:
            logger.info("payroll finalize month=%s: no CL deductions needed", sheet.month)
            return 0

        transaction.commit(self._store, updates)
        logger.info("payroll finalize month=%s: CL deducted for %d faculty", sheet.month, len(updates))
        return len(updates)
