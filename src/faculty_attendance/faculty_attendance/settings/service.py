from __future__ import annotations

import logging
from typing import Optional

from ..core.exceptions import DomainError
from ..store import paths
from ..store.port import RecordStore
from .model import Settings

logger = logging.getLogger(__name__)


class SettingsProvider:
    """Load-once settings holder.

    ``current`` is an immutable snapshot; ``update`` replaces it wholesale
    after the store write succeeds.
    """

    def __init__(self, store: RecordStore):
        self._store = store
        self._current = Settings()
        self._loaded = False
        self.error: Optional[str] = None

    @property
    def current(self) -> Settings:
        if not self._loaded:
            self.load()
        return self._current

    def load(self) -> Settings:
        self.error = None
        try:
            self._current = Settings.from_store(self._store.get(paths.SETTINGS))
        except DomainError:
            logger.exception("settings load failed, using defaults")
            self.error = "Failed to load settings. Using defaults."
            self._current = Settings()
        self._loaded = True
        return self._current

    def update(self, new_settings: Settings) -> Settings:
        self._store.set(paths.SETTINGS, new_settings.to_store())
        self._current = new_settings
        self._loaded = True
        self.error = None
        logger.info(
            "settings updated threshold=%s permission_limit=%s",
            new_settings.on_time_threshold,
            new_settings.permission_limit,
        )
        return new_settings
