from __future__ import annotations

import logging
from typing import Any, Iterable, Mapping, Sequence

from ..common.rows import normalize_row
from ..common.validators import require_decimal, require_non_empty, require_non_negative_int
from ..core.exceptions import NotFoundError, ValidationError
from ..store import paths, transaction
from ..store.port import RecordStore
from .model import FacultyRecord
from .repository import FacultyRepository

logger = logging.getLogger(__name__)


class FacultyService:
    def __init__(self, store: RecordStore, faculty: FacultyRepository):
        self._store = store
        self._faculty = faculty

    def list_faculty(self) -> Sequence[FacultyRecord]:
        return self._faculty.list_all()

    def get(self, emp_id: int) -> FacultyRecord:
        record = self._faculty.get(emp_id)
        if not record:
            raise NotFoundError(f"Faculty member {emp_id} not found.")
        return record

    def add(self, record: FacultyRecord) -> FacultyRecord:
        record = self._validated(record)
        if self._faculty.get(record.emp_id):
            raise ValidationError(f"Faculty with Employee ID {record.emp_id} already exists.")
        self._store.set(paths.faculty(record.emp_id), record.to_store())
        logger.info("faculty added emp_id=%s", record.emp_id)
        return record

    def update(self, record: FacultyRecord) -> FacultyRecord:
        record = self._validated(record)
        self.get(record.emp_id)
        self._store.set(paths.faculty(record.emp_id), record.to_store())
        return record

    def delete(self, emp_id: int) -> None:
        """Remove the faculty member together with all their attendance."""

        self.get(emp_id)
        transaction.commit(self._store, {paths.faculty(emp_id): None, paths.attendance(emp_id): None})
        logger.info("faculty deleted emp_id=%s (attendance cascaded)", emp_id)

    def import_rows(self, rows: Iterable[Mapping[str, Any]]) -> int:
        """Upsert pre-parsed faculty rows in one write; returns the row count."""

        updates: dict[str, Any] = {}
        for index, raw in enumerate(rows):
            row = normalize_row(raw)
            emp_id = row.get("empid") or row.get("emp.id")
            try:
                emp_id = int(emp_id)
            except (TypeError, ValueError):
                emp_id = index
            record = FacultyRecord(
                emp_id=emp_id,
                name=str(row.get("name") or "N/A"),
                dept=str(row.get("dept") or "N/A"),
                designation=str(row.get("designation") or "N/A"),
                salary=require_decimal(row.get("salary") or 0, "Salary"),
                casual_leaves=require_non_negative_int(row.get("casualleaves") or 0, "Casual leaves"),
            )
            updates[paths.faculty(record.emp_id)] = record.to_store()

        if not updates:
            raise ValidationError("No data found in the uploaded rows.")

        transaction.commit(self._store, updates)
        logger.info("faculty import rows=%d", len(updates))
        return len(updates)

    @staticmethod
    def _validated(record: FacultyRecord) -> FacultyRecord:
        return FacultyRecord(
            emp_id=require_non_negative_int(record.emp_id, "Employee ID"),
            name=require_non_empty(record.name, "Name"),
            dept=require_non_empty(record.dept, "Department"),
            designation=require_non_empty(record.designation, "Designation"),
            salary=require_decimal(record.salary, "Salary"),
            casual_leaves=require_non_negative_int(record.casual_leaves, "Casual leaves"),
        )
