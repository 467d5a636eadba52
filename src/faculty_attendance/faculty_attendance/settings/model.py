from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping

from ..common.datetime_utils import normalize_time
from ..common.validators import require_non_negative_int
from ..core.constants import DEFAULT_ON_TIME_THRESHOLD, DEFAULT_PERMISSION_LIMIT


@dataclass(frozen=True)
class Settings:
    """Process-wide configuration snapshot, passed explicitly into calculations."""

    on_time_threshold: str = DEFAULT_ON_TIME_THRESHOLD
    permission_limit: int = DEFAULT_PERMISSION_LIMIT
    account_creation_enabled: bool = True
    user_account_request_enabled: bool = True

    @classmethod
    def from_store(cls, data: Mapping[str, Any] | None) -> "Settings":
        """Merge stored keys over the defaults."""

        data = data or {}
        defaults = cls()
        return cls(
            on_time_threshold=normalize_time(data.get("onTimeThreshold", defaults.on_time_threshold)),
            permission_limit=require_non_negative_int(
                data.get("permissionLimit", defaults.permission_limit), "Permission limit"
            ),
            account_creation_enabled=bool(data.get("accountCreationEnabled", defaults.account_creation_enabled)),
            user_account_request_enabled=bool(
                data.get("userAccountRequestEnabled", defaults.user_account_request_enabled)
            ),
        )

    def to_store(self) -> dict[str, Any]:
        return {
            "onTimeThreshold": self.on_time_threshold,
            "permissionLimit": self.permission_limit,
            "accountCreationEnabled": self.account_creation_enabled,
            "userAccountRequestEnabled": self.user_account_request_enabled,
        }
