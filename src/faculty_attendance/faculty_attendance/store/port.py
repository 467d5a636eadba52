from __future__ import annotations

from typing import Any, Mapping, Optional, Protocol


class RecordStore(Protocol):
    """Keyed hierarchical record store.

    Paths are slash separated (``faculty/12``, ``attendance/12/records/2025-01-06``).
    Writing ``None`` to a path deletes it; reading a missing path returns ``None``.
    Services depend on this interface, never on a concrete backend.
    """

    #: True when ``update`` applies all keys or none of them.
    atomic_updates: bool

    def get(self, path: str) -> Optional[Any]:
        raise NotImplementedError

    def set(self, path: str, value: Any) -> None:
        raise NotImplementedError

    def update(self, updates: Mapping[str, Any], *, expected: Optional[Mapping[str, Any]] = None) -> None:
        """Apply several path writes together.

        ``expected`` maps paths to the value they must currently hold; any
        mismatch raises ``WriteConflictError`` and nothing is written.
        """

        raise NotImplementedError

    def remove(self, path: str) -> None:
        raise NotImplementedError
