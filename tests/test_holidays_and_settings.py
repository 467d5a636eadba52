from __future__ import annotations

from dataclasses import replace
from datetime import date

import pytest

from faculty_attendance.container import build_container
from faculty_attendance.core.exceptions import NotFoundError, StoreError, ValidationError
from faculty_attendance.settings.model import Settings
from faculty_attendance.settings.service import SettingsProvider
from faculty_attendance.store.memory_store import InMemoryRecordStore


def test_holiday_dates_are_unique(container):
    service = container.holiday_service
    service.add(date(2025, 1, 26), "Republic Day")

    with pytest.raises(ValidationError) as err:
        service.add(date(2025, 1, 26), "Duplicate")

    assert err.value.message == "A holiday for the date 2025-01-26 already exists."


def test_holiday_listing_update_and_delete(container):
    service = container.holiday_service
    service.add(date(2025, 3, 14), "Holi")
    service.add(date(2025, 1, 26), "Republic Day")

    assert [h.id for h in service.list_holidays()] == ["2025-01-26", "2025-03-14"]
    assert [h.id for h in service.in_month("2025-03")] == ["2025-03-14"]

    assert service.update_description("2025-03-14", "Holi (observed)").description == "Holi (observed)"
    service.delete("2025-01-26")
    assert [h.id for h in service.list_holidays()] == ["2025-03-14"]
    with pytest.raises(NotFoundError):
        service.delete("2025-01-26")


@pytest.mark.parametrize("holiday_id", ["2025-01-26/description", "../settings", "Republic Day"])
def test_holiday_ids_must_be_dates(container, store, holiday_id):
    container.holiday_service.add(date(2025, 1, 26), "Republic Day")
    before = store.dump()

    with pytest.raises(ValidationError):
        container.holiday_service.update_description(holiday_id, "changed")
    with pytest.raises(ValidationError):
        container.holiday_service.delete(holiday_id)

    assert store.dump() == before


def test_settings_default_when_nothing_stored():
    provider = SettingsProvider(InMemoryRecordStore())

    assert provider.current == Settings(on_time_threshold="08:15:00", permission_limit=2)
    assert provider.error is None


def test_stored_settings_merge_over_defaults():
    provider = SettingsProvider(InMemoryRecordStore({"settings": {"permissionLimit": 4, "onTimeThreshold": "8:30"}}))

    current = provider.load()

    assert current.permission_limit == 4
    assert current.on_time_threshold == "08:30:00"
    assert current.account_creation_enabled is True


def test_settings_fall_back_to_defaults_when_store_fails():
    class Unreachable(InMemoryRecordStore):
        def get(self, path):
            raise StoreError("database unavailable")

    provider = SettingsProvider(Unreachable())

    assert provider.load() == Settings()
    assert provider.error == "Failed to load settings. Using defaults."


@pytest.mark.parametrize("stored", [{"onTimeThreshold": "8am"}, {"permissionLimit": "two"}, {"permissionLimit": -1}])
def test_malformed_stored_settings_fall_back_to_defaults(stored):
    provider = SettingsProvider(InMemoryRecordStore({"settings": stored}))

    assert provider.load() == Settings()
    assert provider.error == "Failed to load settings. Using defaults."


def test_container_builds_with_malformed_settings(store):
    store.set("settings/onTimeThreshold", "8am")

    rebuilt = build_container(store=store)

    assert rebuilt.settings.current.on_time_threshold == "08:15:00"
    assert rebuilt.settings.error == "Failed to load settings. Using defaults."


def test_settings_update_replaces_snapshot_and_persists():
    store = InMemoryRecordStore()
    provider = SettingsProvider(store)
    old = provider.current

    new = provider.update(replace(old, permission_limit=3, user_account_request_enabled=False))

    assert provider.current is new
    assert old.permission_limit == 2
    assert store.get("settings") == {
        "onTimeThreshold": "08:15:00",
        "permissionLimit": 3,
        "accountCreationEnabled": True,
        "userAccountRequestEnabled": False,
    }
