from __future__ import annotations

import logging
from datetime import date
from typing import Sequence

from ..common.datetime_utils import in_month, parse_month
from ..core.exceptions import NotFoundError, ValidationError
from .model import Holiday
from .repository import HolidayRepository

logger = logging.getLogger(__name__)


class HolidayService:
    def __init__(self, holidays: HolidayRepository):
        self._holidays = holidays

    def list_holidays(self) -> Sequence[Holiday]:
        return self._holidays.list_all()

    def in_month(self, month: str) -> Sequence[Holiday]:
        parse_month(month)
        return [h for h in self._holidays.list_all() if in_month(h.date, month)]

    def add(self, day: date, description: str = "") -> Holiday:
        holiday = Holiday(date=day, description=(description or "").strip())
        if self._holidays.get(holiday.id):
            raise ValidationError(f"A holiday for the date {holiday.id} already exists.")
        self._holidays.save(holiday)
        logger.info("holiday added date=%s", holiday.id)
        return holiday

    def update_description(self, holiday_id: str, description: str) -> Holiday:
        existing = self._holidays.get(holiday_id)
        if not existing:
            raise NotFoundError(f"No holiday found for {holiday_id}.")
        holiday = Holiday(date=existing.date, description=(description or "").strip())
        self._holidays.save(holiday)
        return holiday

    def delete(self, holiday_id: str) -> None:
        if not self._holidays.get(holiday_id):
            raise NotFoundError(f"No holiday found for {holiday_id}.")
        self._holidays.delete(holiday_id)
        logger.info("holiday deleted date=%s", holiday_id)
