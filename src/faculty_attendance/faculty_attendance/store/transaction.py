from __future__ import annotations

import logging
from typing import Any, Mapping, Optional

from ..core.exceptions import PartialWriteError, StoreError, WriteConflictError
from .memory_store import normalize_value
from .port import RecordStore

logger = logging.getLogger(__name__)


def commit(store: RecordStore, updates: Mapping[str, Any], *, expected: Optional[Mapping[str, Any]] = None) -> None:
    """Apply a multi-key update and never let a partial write pass silently.

    Atomic stores either apply everything or raise. For stores that cannot
    promise that, every key is read before the write; after a failure a key
    counts as applied only if it moved to its target value, and a mix of
    applied and pending keys raises ``PartialWriteError``. Keys that already
    held their target are on neither side.
    """

    atomic = getattr(store, "atomic_updates", False)
    targets = {path: normalize_value(value) for path, value in updates.items()}
    before = {} if atomic else {path: store.get(path) for path in updates}

    try:
        store.update(updates, expected=expected)
    except WriteConflictError:
        raise
    except StoreError:
        if atomic:
            raise

        applied: list[str] = []
        pending: list[str] = []
        for path, target in targets.items():
            if before[path] == target:
                continue
            if store.get(path) == target:
                applied.append(path)
            else:
                pending.append(path)

        if applied and pending:
            logger.error("partial multi-key write applied=%s pending=%s", applied, pending)
            raise PartialWriteError(
                "Only part of the changes were saved; the records are now inconsistent and need review",
                applied=applied,
                pending=pending,
            )
        raise
