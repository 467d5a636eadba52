from __future__ import annotations

import re
from typing import Any, Mapping


def normalize_row(row: Mapping[str, Any]) -> dict[str, Any]:
    """Lower-case column names and drop whitespace ("Emp ID" -> "empid")."""

    return {re.sub(r"\s", "", str(key)).lower(): value for key, value in row.items()}
