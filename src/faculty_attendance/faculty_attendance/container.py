from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .allocation.repository import AllocationRepository
from .allocation.service import CasualLeaveAllocator
from .attendance.factory import AttendanceStrategyFactory
from .attendance.repository import AttendanceRepository
from .attendance.service import AttendanceService
from .database.connection import DBConfig, DatabaseConnection
from .faculty.repository import FacultyRepository
from .faculty.service import FacultyService
from .holidays.repository import HolidayRepository
from .holidays.service import HolidayService
from .leaves.repository import LeaveRepository
from .leaves.service import LeaveWorkflow
from .payroll.service import PayrollService
from .settings.service import SettingsProvider
from .store.memory_store import InMemoryRecordStore
from .store.mysql_store import MySQLRecordStore
from .store.port import RecordStore


@dataclass(frozen=True)
class Container:
    store: RecordStore

    faculty_repo: FacultyRepository
    attendance_repo: AttendanceRepository
    leaves_repo: LeaveRepository
    holidays_repo: HolidayRepository
    allocations_repo: AllocationRepository

    settings: SettingsProvider
    faculty_service: FacultyService
    attendance_service: AttendanceService
    leave_workflow: LeaveWorkflow
    holiday_service: HolidayService
    payroll_service: PayrollService
    allocator: CasualLeaveAllocator


def build_store(*, backend: str, db_config: Optional[dict] = None) -> RecordStore:
    backend = (backend or "memory").lower()
    if backend == "memory":
        return InMemoryRecordStore()
    if backend == "mysql":
        if not db_config:
            raise ValueError("STORE_BACKEND=mysql requires DB_CONFIG")
        return MySQLRecordStore(DatabaseConnection.get_instance(DBConfig.from_mapping(db_config)))
    raise ValueError(f"Unknown STORE_BACKEND {backend!r}")


def build_container(*, store: RecordStore) -> Container:
    faculty_repo = FacultyRepository(store)
    attendance_repo = AttendanceRepository(store)
    leaves_repo = LeaveRepository(store)
    holidays_repo = HolidayRepository(store)
    allocations_repo = AllocationRepository(store)

    settings = SettingsProvider(store)
    settings.load()

    return Container(
        store=store,
        faculty_repo=faculty_repo,
        attendance_repo=attendance_repo,
        leaves_repo=leaves_repo,
        holidays_repo=holidays_repo,
        allocations_repo=allocations_repo,
        settings=settings,
        faculty_service=FacultyService(store, faculty_repo),
        attendance_service=AttendanceService(
            store,
            attendance_repo,
            faculty_repo,
            settings,
            strategy_factory=AttendanceStrategyFactory(),
        ),
        leave_workflow=LeaveWorkflow(store, leaves_repo, faculty_repo),
        holiday_service=HolidayService(holidays_repo),
        payroll_service=PayrollService(store, faculty_repo, attendance_repo, holidays_repo, settings),
        allocator=CasualLeaveAllocator(store, allocations_repo, faculty_repo, attendance_repo),
    )
