from __future__ import annotations

from typing import Optional, Sequence

from ..store import paths
from ..store.port import RecordStore
from .model import LeaveApplication


class LeaveRepository:
    def __init__(self, store: RecordStore):
        self._store = store

    def list_all(self) -> Sequence[LeaveApplication]:
        data = self._store.get(paths.LEAVE_APPLICATIONS) or {}
        return [LeaveApplication.from_store(leave_id, row) for leave_id, row in data.items()]

    def get(self, leave_id: str) -> Optional[LeaveApplication]:
        data = self._store.get(paths.leave_application(leave_id))
        if not data:
            return None
        return LeaveApplication.from_store(leave_id, data)
