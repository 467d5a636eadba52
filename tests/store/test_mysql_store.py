from __future__ import annotations

import mysql.connector
import pytest
from mysql.connector import errorcode

from faculty_attendance.core.exceptions import StoreError, WriteConflictError
from faculty_attendance.store.mysql_store import MySQLRecordStore, flatten, unflatten


class FakeCursor:
    def __init__(self):
        self.calls = []

    def execute(self, sql, params=None):
        self.calls.append((sql.split()[0], params))

    def executemany(self, sql, seq):
        self.calls.append(("INSERT", list(seq)))

    def fetchall(self):
        return []

    def close(self):
        pass


class FakeConnection:
    def __init__(self):
        self.cur = FakeCursor()
        self.committed = False
        self.rolled_back = False

    def cursor(self, dictionary=False):
        return self.cur

    def commit(self):
        self.committed = True

    def rollback(self):
        self.rolled_back = True

    def close(self):
        pass


class FakeConnFactory:
    def __init__(self):
        self.conn = FakeConnection()

    def connect(self):
        return self.conn


def test_flatten_and_unflatten_nested_value():
    rows = flatten("faculty/1", {"name": "Asha", "casualLeaves": 2})

    assert sorted(rows) == [("faculty/1/casualLeaves", 2), ("faculty/1/name", "Asha")]
    assert unflatten("faculty/1", rows) == {"name": "Asha", "casualLeaves": 2}


def test_unflatten_leaf_missing_and_sibling_prefix():
    assert unflatten("settings/permissionLimit", [("settings/permissionLimit", 3)]) == 3
    assert unflatten("faculty", []) is None
    assert unflatten("faculty/1", [("faculty/1/name", "A"), ("faculty/10/name", "B")]) == {"name": "A"}


def test_update_replaces_subtree_in_one_transaction():
    factory = FakeConnFactory()
    store = MySQLRecordStore(factory)

    store.update({"faculty/1": {"name": "Asha", "casualLeaves": 2}})

    calls = factory.conn.cur.calls
    assert calls[0] == ("DELETE", ("faculty/1", "faculty/1/%"))
    assert calls[1] == ("DELETE", ("faculty",))
    assert calls[2] == ("INSERT", [("faculty/1/name", '"Asha"'), ("faculty/1/casualLeaves", "2")])
    assert factory.conn.committed


def test_failed_expectation_rolls_back():
    factory = FakeConnFactory()
    store = MySQLRecordStore(factory)

    with pytest.raises(WriteConflictError):
        store.update(
            {"monthlyAllocations/2025-01": {"completed": True}},
            expected={"monthlyAllocations/2025-01/completed": True},
        )

    assert factory.conn.rolled_back
    assert not factory.conn.committed
    assert all(kind != "INSERT" for kind, _ in factory.conn.cur.calls)


class DeadlockCursor(FakeCursor):
    def executemany(self, sql, seq):
        raise mysql.connector.Error(msg="Deadlock found when trying to get lock", errno=errorcode.ER_LOCK_DEADLOCK)


def _deadlocking_factory():
    factory = FakeConnFactory()
    factory.conn.cur = DeadlockCursor()
    return factory


def test_deadlock_on_conditional_write_is_a_conflict():
    factory = _deadlocking_factory()
    store = MySQLRecordStore(factory)

    with pytest.raises(WriteConflictError) as err:
        store.update(
            {"monthlyAllocations/2025-01": {"completed": True}},
            expected={"monthlyAllocations/2025-01/completed": None},
        )

    assert err.value.path == "monthlyAllocations/2025-01/completed"
    assert factory.conn.rolled_back


def test_deadlock_on_plain_write_is_a_store_error():
    store = MySQLRecordStore(_deadlocking_factory())

    with pytest.raises(StoreError) as err:
        store.update({"faculty/1/casualLeaves": 3})

    assert not isinstance(err.value, WriteConflictError)
