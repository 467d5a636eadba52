from __future__ import annotations

import json
import logging
from typing import Any, Iterable, Mapping, Optional

import mysql.connector
from mysql.connector import errorcode

from ..core.exceptions import StoreError, WriteConflictError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall
from . import paths
from .memory_store import normalize_value
from .port import RecordStore

logger = logging.getLogger(__name__)


def flatten(path: str, value: Any) -> list[tuple[str, Any]]:
    """Break a nested value into (leaf path, scalar) rows."""

    if isinstance(value, Mapping):
        rows: list[tuple[str, Any]] = []
        for key, child in value.items():
            rows.extend(flatten(f"{path}/{key}", child))
        return rows
    return [(path, value)]


def unflatten(path: str, rows: Iterable[tuple[str, Any]]) -> Optional[Any]:
    """Rebuild the value stored at ``path`` from its leaf rows."""

    tree: dict = {}
    for row_path, value in rows:
        if row_path == path:
            return value
        if not row_path.startswith(path + "/"):
            continue
        parts = row_path[len(path) + 1:].split("/")
        node = tree
        for part in parts[:-1]:
            node = node.setdefault(part, {})
        node[parts[-1]] = value
    return tree or None


def _like_prefix(path: str) -> str:
    escaped = path.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return escaped + "/%"


def _decode(raw: Any) -> Any:
    if isinstance(raw, (bytes, bytearray)):
        raw = raw.decode("utf-8")
    return json.loads(raw) if isinstance(raw, str) else raw


class MySQLRecordStore(RecordStore):
    """Record store backed by the ``store_records`` table (one row per leaf).

    Every ``update`` runs inside a single transaction, so multi-key writes are
    all-or-nothing.
    """

    atomic_updates = True

    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def _read(self, cur, path: str, *, lock: bool = False) -> Optional[Any]:
        sql = "SELECT path, value FROM store_records WHERE path=%s OR path LIKE %s"
        if lock:
            sql += " FOR UPDATE"
        cur.execute(sql, (path, _like_prefix(path)))
        rows = fetchall(cur)
        return unflatten(path, ((r["path"], _decode(r["value"])) for r in rows))

    def _write(self, cur, path: str, value: Any) -> None:
        cur.execute(
            "DELETE FROM store_records WHERE path=%s OR path LIKE %s",
            (path, _like_prefix(path)),
        )
        parts = paths.split(path)
        ancestors = ["/".join(parts[:i]) for i in range(1, len(parts))]
        if ancestors:
            placeholders = ",".join(["%s"] * len(ancestors))
            cur.execute(f"DELETE FROM store_records WHERE path IN ({placeholders})", tuple(ancestors))

        value = normalize_value(value)
        if value is None:
            return
        cur.executemany(
            "INSERT INTO store_records(path, value) VALUES(%s, %s)",
            [(p, json.dumps(v)) for p, v in flatten(path, value)],
        )

    def get(self, path: str) -> Optional[Any]:
        path = "/".join(paths.split(path))
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                return self._read(cur, path)
        except mysql.connector.Error as exc:
            logger.exception("store read failed path=%s", path)
            raise StoreError("Could not read data from the database") from exc

    def set(self, path: str, value: Any) -> None:
        self.update({path: value})

    def update(self, updates: Mapping[str, Any], *, expected: Optional[Mapping[str, Any]] = None) -> None:
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                for path, value in (expected or {}).items():
                    current = self._read(cur, "/".join(paths.split(path)), lock=True)
                    if current != normalize_value(value):
                        raise WriteConflictError(f"Record {path} was changed by another operation", path=path)
                for path, value in updates.items():
                    self._write(cur, "/".join(paths.split(path)), value)
        except mysql.connector.Error as exc:
            # Conditional writes racing on a missing row deadlock on its gap lock; the victim lost the race.
            if expected and exc.errno == errorcode.ER_LOCK_DEADLOCK:
                logger.warning("conditional update lost a deadlock keys=%s", sorted(expected))
                raise WriteConflictError("Record was changed by another operation", path=next(iter(expected))) from exc
            logger.exception("store update failed keys=%d", len(updates))
            raise StoreError("Could not save changes to the database") from exc

    def remove(self, path: str) -> None:
        self.update({path: None})
