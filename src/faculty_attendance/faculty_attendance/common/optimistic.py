from __future__ import annotations

from contextlib import contextmanager
from typing import Iterator, MutableMapping, TypeVar

K = TypeVar("K")
V = TypeVar("V")


@contextmanager
def optimistic(state: MutableMapping[K, V]) -> Iterator[MutableMapping[K, V]]:
    """Apply tentative in-memory changes; restore the snapshot if the block fails."""

    snapshot = dict(state)
    try:
        yield state
    except Exception:
        state.clear()
        state.update(snapshot)
        raise
