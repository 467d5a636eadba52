from __future__ import annotations

import pytest

from faculty_attendance.container import build_container
from faculty_attendance.store.memory_store import InMemoryRecordStore


def faculty_rows() -> dict:
    return {
        "1": {"name": "Asha", "dept": "CSE", "designation": "Professor", "salary": "3000", "casualLeaves": 2},
        "2": {"name": "Bala", "dept": "ECE", "designation": "Lecturer", "salary": "2000", "casualLeaves": 0},
        "3": {"name": "Chitra", "dept": "CSE", "designation": "Lecturer", "salary": "2500", "casualLeaves": 1},
    }


@pytest.fixture
def store() -> InMemoryRecordStore:
    return InMemoryRecordStore({"faculty": faculty_rows()})


@pytest.fixture
def container(store):
    return build_container(store=store)


@pytest.fixture
def put_attendance(store):
    def _put(emp_id, day, status, in_time="08:00:00", leave_id=None):
        record = {"inTime": in_time, "status": status}
        if leave_id:
            record["leaveApplicationId"] = leave_id
        store.set(f"attendance/{emp_id}/records/{day}", record)

    return _put
