from __future__ import annotations

from dataclasses import dataclass
from datetime import date


@dataclass(frozen=True)
class Holiday:
    """A non-working day; the date doubles as its id."""

    date: date
    description: str = ""

    @property
    def id(self) -> str:
        return self.date.isoformat()
