from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Mapping


@dataclass(frozen=True)
class FacultyRecord:
    """Domain entity: a faculty member and their casual-leave balance."""

    emp_id: int
    name: str
    dept: str
    designation: str
    salary: Decimal
    casual_leaves: int = 0

    @classmethod
    def from_store(cls, emp_id: int | str, data: Mapping[str, Any]) -> "FacultyRecord":
        return cls(
            emp_id=int(emp_id),
            name=str(data.get("name") or "N/A"),
            dept=str(data.get("dept") or "N/A"),
            designation=str(data.get("designation") or "N/A"),
            salary=Decimal(str(data.get("salary") or 0)),
            casual_leaves=int(data.get("casualLeaves") or 0),
        )

    def to_store(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "dept": self.dept,
            "designation": self.designation,
            "salary": str(self.salary),
            "casualLeaves": self.casual_leaves,
        }
