from __future__ import annotations

import logging
import uuid
from dataclasses import replace
from datetime import date, datetime
from typing import Callable, Optional, Sequence

from ..common.datetime_utils import iter_days, now_utc, parse_month
from ..common.optimistic import optimistic
from ..core.constants import ABSENT_IN_TIME
from ..core.enums import AttendanceStatus, LeaveStatus
from ..core.exceptions import InvalidRangeError, NotFoundError
from ..faculty.repository import FacultyRepository
from ..store import paths, transaction
from ..store.port import RecordStore
from .model import LeaveApplication
from .repository import LeaveRepository

logger = logging.getLogger(__name__)


def _attendance_paths(leave: LeaveApplication) -> list[str]:
    """Every attendance key covered by the leave; raises before any write on an inverted range."""

    return [paths.attendance_record(leave.emp_id, day) for day in iter_days(leave.start_date, leave.end_date)]


class LeaveWorkflow:
    """Leave submission and the approve/reject/delete decisions.

    Keeps an in-memory view of the applications (what an admin screen shows).
    Every decision flips that view first and restores it if the store write
    fails, so the view never drifts from the store.
    """

    def __init__(
        self,
        store: RecordStore,
        leaves: LeaveRepository,
        faculty: FacultyRepository,
        *,
        id_factory: Optional[Callable[[], str]] = None,
    ):
        self._store = store
        self._leaves = leaves
        self._faculty = faculty
        self._new_id = id_factory or (lambda: uuid.uuid4().hex)
        self._applications: dict[str, LeaveApplication] = {}

    def refresh(self) -> Sequence[LeaveApplication]:
        self._applications = {leave.id: leave for leave in self._leaves.list_all()}
        return self.applications()

    def applications(self) -> Sequence[LeaveApplication]:
        """Newest submission first."""

        return sorted(self._applications.values(), key=lambda a: a.submission_timestamp, reverse=True)

    def for_employee(self, emp_id: int, month: Optional[str] = None) -> Sequence[LeaveApplication]:
        if month:
            parse_month(month)
        rows = [
            leave
            for leave in self._leaves.list_all()
            if leave.emp_id == int(emp_id)
            and (
                not month
                or leave.start_date.strftime("%Y-%m") == month
                or leave.end_date.strftime("%Y-%m") == month
            )
        ]
        return sorted(rows, key=lambda a: a.start_date, reverse=True)

    def submit(
        self,
        emp_id: int,
        start_date: date,
        end_date: date,
        reason: str = "",
        *,
        now: Optional[datetime] = None,
    ) -> LeaveApplication:
        """Create a Pending application and mark its unrecorded days as linked absences."""

        if end_date < start_date:
            raise InvalidRangeError("End date must be on or after the start date.")
        if not self._faculty.get(emp_id):
            raise NotFoundError(f"Faculty member {emp_id} not found.")

        leave = LeaveApplication(
            id=self._new_id(),
            emp_id=int(emp_id),
            start_date=start_date,
            end_date=end_date,
            submission_timestamp=now or now_utc(),
            reason=(reason or "").strip(),
        )
        existing = self._store.get(paths.attendance_records(leave.emp_id)) or {}
        absent = {"inTime": ABSENT_IN_TIME, "status": AttendanceStatus.ABSENT.value, "leaveApplicationId": leave.id}
        updates: dict = {}
        for day in iter_days(leave.start_date, leave.end_date):
            record = existing.get(day.isoformat())
            # Punched or manually marked days keep their record.
            if record and not record.get("leaveApplicationId"):
                continue
            updates[paths.attendance_record(leave.emp_id, day)] = dict(absent)
        updates[paths.leave_application(leave.id)] = leave.to_store()

        transaction.commit(self._store, updates)
        self._applications[leave.id] = leave
        logger.info("leave submitted id=%s emp_id=%s days=%d", leave.id, leave.emp_id, len(updates) - 1)
        return leave

    def approve(self, leave_id: str) -> LeaveApplication:
        """Mark the application Approved; attendance is left untouched."""

        with optimistic(self._applications) as view:
            self._flip(view, leave_id, LeaveStatus.APPROVED)
            current = self._require(leave_id)
            status_path = f"{paths.leave_application(leave_id)}/status"
            transaction.commit(
                self._store,
                {status_path: LeaveStatus.APPROVED.value},
                expected={status_path: current.status.value},
            )
            approved = replace(current, status=LeaveStatus.APPROVED)
            view[leave_id] = approved

        logger.info("leave approved id=%s", leave_id)
        return approved

    def reject(self, leave_id: str) -> LeaveApplication:
        """Mark the application Rejected and clear attendance across its range in one write."""

        with optimistic(self._applications) as view:
            self._flip(view, leave_id, LeaveStatus.REJECTED)
            current = self._require(leave_id)
            status_path = f"{paths.leave_application(leave_id)}/status"

            updates = {path: None for path in _attendance_paths(current)}
            updates[status_path] = LeaveStatus.REJECTED.value
            transaction.commit(self._store, updates, expected={status_path: current.status.value})

            rejected = replace(current, status=LeaveStatus.REJECTED)
            view[leave_id] = rejected

        logger.info("leave rejected id=%s cleared_days=%d", leave_id, len(updates) - 1)
        return rejected

    def delete_leave(self, leave: LeaveApplication) -> None:
        """Purge the application and the attendance across its range."""

        with optimistic(self._applications) as view:
            view.pop(leave.id, None)
            current = self._require(leave.id)

            updates = {path: None for path in _attendance_paths(current)}
            updates[paths.leave_application(current.id)] = None
            transaction.commit(self._store, updates)

        logger.info("leave deleted id=%s emp_id=%s", current.id, current.emp_id)

    def _require(self, leave_id: str) -> LeaveApplication:
        current = self._leaves.get(leave_id)
        if not current:
            raise NotFoundError("Leave application not found.")
        return current

    @staticmethod
    def _flip(view: dict, leave_id: str, status: LeaveStatus) -> None:
        cached = view.get(leave_id)
        if cached:
            view[leave_id] = replace(cached, status=status)
