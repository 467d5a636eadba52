from __future__ import annotations

import copy
import threading
from typing import Any, Mapping, Optional

from ..core.exceptions import WriteConflictError
from . import paths
from .port import RecordStore


def normalize_value(value: Any) -> Any:
    """Drop ``None`` children and empty dicts, mirroring delete-on-null semantics."""

    if isinstance(value, Mapping):
        out = {}
        for key, child in value.items():
            child = normalize_value(child)
            if child is not None:
                out[str(key)] = child
        return out or None
    return copy.deepcopy(value)


def _lookup(root: dict, parts: list[str]) -> Optional[Any]:
    node: Any = root
    for part in parts:
        if not isinstance(node, dict) or part not in node:
            return None
        node = node[part]
    return node


def _assign(root: dict, parts: list[str], value: Any) -> None:
    value = normalize_value(value)
    if value is None:
        trail = [root]
        node: Any = root
        for part in parts[:-1]:
            node = node.get(part) if isinstance(node, dict) else None
            if not isinstance(node, dict):
                return
            trail.append(node)
        trail[-1].pop(parts[-1], None)
        # Prune parents left empty by the delete.
        for depth in range(len(parts) - 1, 0, -1):
            if trail[depth]:
                break
            trail[depth - 1].pop(parts[depth - 1], None)
        return

    node = root
    for part in parts[:-1]:
        child = node.get(part)
        if not isinstance(child, dict):
            child = {}
            node[part] = child
        node = child
    node[parts[-1]] = value


class InMemoryRecordStore(RecordStore):
    """Dict-backed store used for tests, demos and ``STORE_BACKEND=memory``."""

    atomic_updates = True

    def __init__(self, initial: Optional[Mapping[str, Any]] = None):
        self._root: dict = normalize_value(initial or {}) or {}
        self._lock = threading.Lock()

    def get(self, path: str) -> Optional[Any]:
        with self._lock:
            return copy.deepcopy(_lookup(self._root, paths.split(path)))

    def set(self, path: str, value: Any) -> None:
        self.update({path: value})

    def update(self, updates: Mapping[str, Any], *, expected: Optional[Mapping[str, Any]] = None) -> None:
        with self._lock:
            for path, value in (expected or {}).items():
                if _lookup(self._root, paths.split(path)) != normalize_value(value):
                    raise WriteConflictError(f"Record {path} was changed by another operation", path=path)

            staged = copy.deepcopy(self._root)
            for path, value in updates.items():
                _assign(staged, paths.split(path), value)
            self._root = staged

    def remove(self, path: str) -> None:
        self.update({path: None})

    def dump(self) -> dict:
        with self._lock:
            return copy.deepcopy(self._root)
