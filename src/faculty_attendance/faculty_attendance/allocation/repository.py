from __future__ import annotations

from typing import Optional

from ..store import paths
from ..store.port import RecordStore
from .model import MonthlyAllocation


class AllocationRepository:
    def __init__(self, store: RecordStore):
        self._store = store

    def get(self, month: str) -> Optional[MonthlyAllocation]:
        data = self._store.get(paths.monthly_allocation(month))
        if not data:
            return None
        return MonthlyAllocation.from_store(month, data)
