from __future__ import annotations

from typing import Optional, Sequence

from ..store import paths
from ..store.port import RecordStore
from .model import FacultyRecord


class FacultyRepository:
    def __init__(self, store: RecordStore):
        self._store = store

    def list_all(self) -> Sequence[FacultyRecord]:
        data = self._store.get(paths.FACULTY) or {}
        faculty = [FacultyRecord.from_store(emp_id, row) for emp_id, row in data.items()]
        return sorted(faculty, key=lambda f: (f.name, f.emp_id))

    def get(self, emp_id: int) -> Optional[FacultyRecord]:
        data = self._store.get(paths.faculty(emp_id))
        if not data:
            return None
        return FacultyRecord.from_store(emp_id, data)

    def ids(self) -> set[int]:
        return {int(emp_id) for emp_id in (self._store.get(paths.FACULTY) or {})}
