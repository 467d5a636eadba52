from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Mapping, Optional


@dataclass(frozen=True)
class MonthlyAllocation:
    """Completion marker for a month's casual-leave allocation (write-once)."""

    month: str
    completed: bool
    timestamp: Optional[datetime] = None
    updated_count: int = 0

    @classmethod
    def from_store(cls, month: str, data: Mapping[str, Any]) -> "MonthlyAllocation":
        ts = data.get("timestamp")
        return cls(
            month=month,
            completed=bool(data.get("completed")),
            timestamp=datetime.fromisoformat(ts) if ts else None,
            updated_count=int(data.get("updatedCount") or 0),
        )

    def to_store(self) -> dict[str, Any]:
        return {
            "completed": self.completed,
            "timestamp": self.timestamp.isoformat() if self.timestamp else None,
            "updatedCount": self.updated_count,
        }

    @property
    def message(self) -> str:
        if self.updated_count == 0:
            return "Completed. No faculty were eligible. Month is now locked."
        return f"Allocated 1 CL to {self.updated_count} faculty members. Month is now locked."
