from __future__ import annotations

from dataclasses import dataclass, replace
from decimal import Decimal
from typing import Callable, Optional

from ..core.exceptions import NotFoundError


@dataclass(frozen=True)
class MonthlySummary:
    """One employee's derived payroll figures for a month. Never persisted."""

    emp_id: int
    name: str
    dept: str
    designation: str
    monthly_salary: Decimal
    present_days: int
    absent_days: int
    late_count: int
    permissions: int
    half_day_leaves: int
    casual_leaves_available: int
    casual_leaves_used: int
    unpaid_leave: int
    total_leaves: Decimal
    payable_days: Decimal
    calculated_salary: Decimal
    payable_days_overridden: bool = False


@dataclass(frozen=True)
class PayrollSheet:
    """The month's summaries plus the day counts they were derived from."""

    month: str
    total_days: int
    holidays_in_month: int
    working_days: int
    rows: tuple[MonthlySummary, ...] = ()

    def row(self, emp_id: int) -> Optional[MonthlySummary]:
        return next((r for r in self.rows if r.emp_id == int(emp_id)), None)

    def with_payable_days(
        self,
        emp_id: int,
        payable_days: Decimal,
        prorate: Callable[[Decimal, int, Decimal], Decimal],
    ) -> "PayrollSheet":
        target = self.row(emp_id)
        if not target:
            raise NotFoundError(f"No summary row for employee {emp_id}.")

        updated = replace(
            target,
            payable_days=payable_days,
            calculated_salary=prorate(payable_days, self.working_days, target.monthly_salary),
            payable_days_overridden=True,
        )
        return replace(self, rows=tuple(updated if r.emp_id == target.emp_id else r for r in self.rows))
