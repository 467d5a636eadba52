from __future__ import annotations

from datetime import date
from typing import Optional, Sequence

from ..store import paths
from ..store.port import RecordStore
from .aggregator import flatten
from .model import AttendanceRecord


class AttendanceRepository:
    def __init__(self, store: RecordStore):
        self._store = store

    def list_all(self) -> Sequence[AttendanceRecord]:
        return flatten(self._store.get(paths.ATTENDANCE))

    def list_for_employee(self, emp_id: int) -> Sequence[AttendanceRecord]:
        records = self._store.get(paths.attendance_records(emp_id)) or {}
        rows = [AttendanceRecord.from_store(emp_id, day, data) for day, data in records.items()]
        return sorted(rows, key=lambda r: r.date, reverse=True)

    def get(self, emp_id: int, day: date) -> Optional[AttendanceRecord]:
        data = self._store.get(paths.attendance_record(emp_id, day))
        if not data:
            return None
        return AttendanceRecord.from_store(emp_id, day.isoformat(), data)
