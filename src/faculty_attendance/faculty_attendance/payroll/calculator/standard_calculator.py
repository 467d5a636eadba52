from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal
from typing import Sequence

from ...attendance.model import AttendanceRecord
from ...core.constants import HALF_DAY, SALARY_QUANTUM
from ...core.enums import AttendanceStatus
from ...faculty.model import FacultyRecord
from ..model import MonthlySummary
from .base import PayrollCalculator


class StandardPayrollCalculator(PayrollCalculator):
    """Standard rule.

    Absences beyond the month's present days consume casual leave first and
    become unpaid after that. Late arrivals up to the permission limit are
    free; each one beyond it costs half a day. Salary is prorated over the
    working days.
    """

    def summarize_employee(
        self,
        member: FacultyRecord,
        records: Sequence[AttendanceRecord],
        *,
        working_days: int,
        permission_limit: int,
    ) -> MonthlySummary:
        present_days = sum(1 for r in records if r.status != AttendanceStatus.ABSENT)
        absent_days = max(0, working_days - present_days)

        available = max(0, int(member.casual_leaves or 0))
        casual_used = min(absent_days, available)
        unpaid = absent_days - casual_used

        late_count = sum(1 for r in records if r.status == AttendanceStatus.LATE)
        permissions = min(late_count, permission_limit)
        half_days = max(0, late_count - permission_limit)

        total_leaves = Decimal(unpaid) + Decimal(half_days) * HALF_DAY
        payable_days = max(Decimal(0), Decimal(working_days) - total_leaves)

        return MonthlySummary(
            emp_id=member.emp_id,
            name=member.name,
            dept=member.dept,
            designation=member.designation,
            monthly_salary=member.salary,
            present_days=present_days,
            absent_days=absent_days,
            late_count=late_count,
            permissions=permissions,
            half_day_leaves=half_days,
            casual_leaves_available=available,
            casual_leaves_used=casual_used,
            unpaid_leave=unpaid,
            total_leaves=total_leaves,
            payable_days=payable_days,
            calculated_salary=self.prorate(payable_days, working_days, member.salary),
        )

    def prorate(self, payable_days: Decimal, working_days: int, salary: Decimal) -> Decimal:
        if working_days <= 0:
            return Decimal("0.00")
        amount = Decimal(payable_days) / Decimal(working_days) * Decimal(salary or 0)
        return amount.quantize(SALARY_QUANTUM, rounding=ROUND_HALF_UP)
