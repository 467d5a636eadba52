from __future__ import annotations

import logging
from datetime import date
from typing import Any, Iterable, Mapping, Optional, Sequence

from ..common.datetime_utils import in_month, parse_month
from ..common.rows import normalize_row
from ..core.constants import ABSENT_IN_TIME, MANUAL_PRESENT_IN_TIME
from ..core.enums import AttendanceStatus, ManualMark
from ..core.exceptions import NotFoundError, ValidationError
from ..faculty.repository import FacultyRepository
from ..settings.service import SettingsProvider
from ..store import paths, transaction
from ..store.port import RecordStore
from . import aggregator
from .factory import AttendanceStrategyFactory, classify
from .model import AttendanceEntry, AttendanceRecord, ImportResult, MonthStats, RosterRow
from .repository import AttendanceRepository

logger = logging.getLogger(__name__)

NOT_MARKED = "Not Marked"

_ROSTER_ORDER = {
    NOT_MARKED: 1,
    AttendanceStatus.LATE.value: 2,
    AttendanceStatus.ON_TIME.value: 3,
    AttendanceStatus.ABSENT.value: 4,
    AttendanceStatus.ON_DUTY.value: 5,
}

_MANUAL_STATUS = {
    ManualMark.PRESENT: AttendanceStatus.ON_TIME,
    ManualMark.LEAVE: AttendanceStatus.ABSENT,
    ManualMark.ON_DUTY: AttendanceStatus.ON_DUTY,
}


class AttendanceService:
    def __init__(
        self,
        store: RecordStore,
        attendance: AttendanceRepository,
        faculty: FacultyRepository,
        settings: SettingsProvider,
        *,
        strategy_factory: AttendanceStrategyFactory | None = None,
    ):
        self._store = store
        self._attendance = attendance
        self._faculty = faculty
        self._settings = settings
        self._factory = strategy_factory or AttendanceStrategyFactory()

    def import_rows(self, rows: Iterable[Mapping[str, Any]], work_date: date) -> ImportResult:
        """Classify pre-parsed punch rows for one day and store the valid ones."""

        threshold = self._settings.current.on_time_threshold
        valid_ids = self._faculty.ids()
        if not valid_ids:
            raise ValidationError("No faculty found.")

        updates: dict[str, Any] = {}
        skipped: list[Any] = []
        seen_rows = 0
        for index, raw in enumerate(rows):
            seen_rows += 1
            row = normalize_row(raw)
            raw_id = row.get("emp.id") or row.get("empid") or index
            try:
                emp_id = int(raw_id)
            except (TypeError, ValueError):
                skipped.append(raw_id)
                continue
            if emp_id not in valid_ids:
                skipped.append(emp_id)
                continue

            decision = classify(row.get("in.time") or row.get("intime"), threshold, factory=self._factory)
            record = AttendanceRecord(emp_id=emp_id, date=work_date, in_time=decision.in_time, status=decision.status)
            updates[paths.attendance_record(emp_id, work_date)] = record.to_store()

        if not seen_rows:
            raise ValidationError("No data found.")
        if not updates:
            raise ValidationError(f"Invalid Employee IDs: {', '.join(str(i) for i in skipped)}")

        transaction.commit(self._store, updates)
        result = ImportResult(uploaded=len(updates), skipped_ids=tuple(dict.fromkeys(skipped)))
        logger.info("attendance import date=%s uploaded=%d skipped=%d", work_date, result.uploaded, len(skipped))
        return result

    def mark_manual(self, emp_id: int, day: date, mark_as: ManualMark) -> AttendanceRecord:
        if not self._faculty.get(emp_id):
            raise NotFoundError(f"Faculty member {emp_id} not found.")

        try:
            mark_as = ManualMark(mark_as)
        except ValueError:
            raise ValidationError(f"Unknown attendance mark {mark_as!r}")
        status = _MANUAL_STATUS[mark_as]
        existing = self._attendance.get(emp_id, day)
        if existing and existing.status == AttendanceStatus.LATE:
            # Keep the recorded punch time, only re-label the day.
            self._store.set(f"{paths.attendance_record(emp_id, day)}/status", status.value)
            return AttendanceRecord(
                emp_id=emp_id,
                date=day,
                in_time=existing.in_time,
                status=status,
                leave_application_id=existing.leave_application_id,
            )

        in_time = MANUAL_PRESENT_IN_TIME if mark_as == ManualMark.PRESENT else ABSENT_IN_TIME
        record = AttendanceRecord(emp_id=emp_id, date=day, in_time=in_time, status=status)
        self._store.set(paths.attendance_record(emp_id, day), record.to_store())
        return record

    def daily_roster(self, day: date) -> Sequence[RosterRow]:
        rows = []
        for member in self._faculty.list_all():
            record = self._attendance.get(member.emp_id, day)
            rows.append(
                RosterRow(
                    emp_id=member.emp_id,
                    name=member.name,
                    dept=member.dept,
                    status=record.status.value if record else NOT_MARKED,
                    in_time=record.in_time if record else None,
                )
            )
        rows.sort(key=lambda r: (_ROSTER_ORDER[r.status], r.name))
        return rows

    def entries(self, *, start: date, end: date, dept: str = "all", name: str = "") -> Sequence[AttendanceEntry]:
        entries = aggregator.to_entries(self._attendance.list_all(), self._faculty.list_all())
        return aggregator.filter_entries(entries, start=start, end=end, dept=dept, name=name)

    def month_stats(self, emp_id: int, month: str, *, records: Optional[Sequence[AttendanceRecord]] = None) -> MonthStats:
        parse_month(month)
        member = self._faculty.get(emp_id)
        if not member:
            raise NotFoundError("Faculty member not found.")

        records = records if records is not None else self._attendance.list_for_employee(emp_id)
        month_rows = [r for r in records if in_month(r.date, month)]

        def count(status: AttendanceStatus) -> int:
            return sum(1 for r in month_rows if r.status == status)

        on_time = count(AttendanceStatus.ON_TIME)
        late = count(AttendanceStatus.LATE)
        absent = count(AttendanceStatus.ABSENT)
        on_duty = count(AttendanceStatus.ON_DUTY)
        cl_used = min(absent, member.casual_leaves)
        return MonthStats(
            on_time=on_time,
            late=late,
            absent=absent,
            on_duty=on_duty,
            present=on_time + late + on_duty,
            cl_used_this_month=cl_used,
            unpaid_leave=absent - cl_used,
            applied_leave=sum(1 for r in month_rows if r.leave_application_id),
        )
