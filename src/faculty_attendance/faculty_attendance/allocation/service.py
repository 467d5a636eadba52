from __future__ import annotations

import logging
from datetime import datetime
from typing import Optional

from ..attendance.aggregator import records_for_month
from ..attendance.repository import AttendanceRepository
from ..common.datetime_utils import now_utc, parse_month
from ..core.enums import AttendanceStatus
from ..core.exceptions import AlreadyCompletedError, NotFoundError, WriteConflictError
from ..faculty.repository import FacultyRepository
from ..store import paths, transaction
from ..store.port import RecordStore
from .model import MonthlyAllocation
from .repository import AllocationRepository

logger = logging.getLogger(__name__)

ALREADY_COMPLETED = "This action has already been completed for the selected month."


class CasualLeaveAllocator:
    """Grants one casual leave per month to every faculty member with no absences.

    A month moves NotRun -> Completed exactly once. The balance increments and
    the completion marker go out in one write that only lands if the marker's
    ``completed`` flag still holds the value read at the start, so two racing
    runs cannot both allocate.
    """

    def __init__(
        self,
        store: RecordStore,
        allocations: AllocationRepository,
        faculty: FacultyRepository,
        attendance: AttendanceRepository,
    ):
        self._store = store
        self._allocations = allocations
        self._faculty = faculty
        self._attendance = attendance

    def is_completed(self, month: str) -> bool:
        parse_month(month)
        marker = self._allocations.get(month)
        return bool(marker and marker.completed)

    def allocate(self, month: str, *, now: Optional[datetime] = None) -> MonthlyAllocation:
        parse_month(month)
        marker = self._allocations.get(month)
        if marker and marker.completed:
            raise AlreadyCompletedError(ALREADY_COMPLETED)

        faculty = self._faculty.list_all()
        if not faculty:
            raise NotFoundError("No faculty data found.")

        # One absence anywhere in the month forfeits the whole allocation.
        by_emp = records_for_month(self._attendance.list_all(), month)
        absentees = {
            emp_id for emp_id, rows in by_emp.items() if any(r.status == AttendanceStatus.ABSENT for r in rows)
        }

        updates: dict = {
            paths.faculty_casual_leaves(member.emp_id): member.casual_leaves + 1
            for member in faculty
            if member.emp_id not in absentees
        }
        result = MonthlyAllocation(month=month, completed=True, timestamp=now or now_utc(), updated_count=len(updates))
        updates[paths.monthly_allocation(month)] = result.to_store()

        completed_path = f"{paths.monthly_allocation(month)}/completed"
        try:
            transaction.commit(self._store, updates, expected={completed_path: marker.completed if marker else None})
        except WriteConflictError:
            logger.warning("allocation month=%s lost the race to a concurrent run", month)
            raise AlreadyCompletedError(ALREADY_COMPLETED) from None

        logger.info("allocation month=%s updated=%d skipped=%d", month, result.updated_count, len(faculty) - result.updated_count)
        return result
