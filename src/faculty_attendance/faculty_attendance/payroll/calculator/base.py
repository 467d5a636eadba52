from __future__ import annotations

from abc import ABC, abstractmethod
from decimal import Decimal
from typing import Sequence

from ...attendance.model import AttendanceRecord
from ...faculty.model import FacultyRecord
from ..model import MonthlySummary


class PayrollCalculator(ABC):
    """Calculator interface (Strategy Pattern for payroll)."""

    @abstractmethod
    def summarize_employee(
        self,
        member: FacultyRecord,
        records: Sequence[AttendanceRecord],
        *,
        working_days: int,
        permission_limit: int,
    ) -> MonthlySummary:
        raise NotImplementedError

    @abstractmethod
    def prorate(self, payable_days: Decimal, working_days: int, salary: Decimal) -> Decimal:
        raise NotImplementedError
