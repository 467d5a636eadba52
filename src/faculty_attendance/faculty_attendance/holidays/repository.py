from __future__ import annotations

from typing import Optional, Sequence

from ..common.datetime_utils import parse_iso_date
from ..store import paths
from ..store.port import RecordStore
from .model import Holiday


class HolidayRepository:
    def __init__(self, store: RecordStore):
        self._store = store

    def list_all(self) -> Sequence[Holiday]:
        data = self._store.get(paths.HOLIDAYS) or {}
        holidays = [
            Holiday(date=parse_iso_date(row.get("date") or key), description=str(row.get("description") or ""))
            for key, row in data.items()
        ]
        return sorted(holidays, key=lambda h: h.date)

    def get(self, holiday_id: str) -> Optional[Holiday]:
        day = parse_iso_date(holiday_id)
        row = self._store.get(paths.holiday(day))
        if not row:
            return None
        return Holiday(date=day, description=str(row.get("description") or ""))

    def save(self, holiday: Holiday) -> None:
        self._store.set(paths.holiday(holiday.date), {"date": holiday.id, "description": holiday.description})

    def delete(self, holiday_id: str) -> None:
        self._store.remove(paths.holiday(parse_iso_date(holiday_id)))
