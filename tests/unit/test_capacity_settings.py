from datetime import date

import pytest

from pickbook.exceptions import ConfigurationError
from pickbook.schemas.settings import CapacitySettingsUpdate
from pickbook.services.capacity import (
    DEFAULT_SETTINGS,
    accept_settings,
    apply_update,
    merge_with_defaults,
)


def test_defaults():
    assert DEFAULT_SETTINGS.max_capacity_units == 6
    assert DEFAULT_SETTINGS.open_time == "09:00"
    assert DEFAULT_SETTINGS.close_time == "19:00"
    assert DEFAULT_SETTINGS.slot_interval_minutes == 30
    assert DEFAULT_SETTINGS.calendar_horizon_months == 3
    assert DEFAULT_SETTINGS.holiday_dates == []


@pytest.mark.parametrize(
    "override",
    [
        {"slot_interval_minutes": 0},
        {"slot_interval_minutes": -15},
        {"max_capacity_units": 0},
        {"calendar_horizon_months": 0},
        {"open_time": "19:00", "close_time": "09:00"},
        {"open_time": "10:00", "close_time": "10:00"},
        {"open_time": "9am"},
    ],
)
def test_invalid_settings_raise_configuration_error(override):
    data = {**DEFAULT_SETTINGS.model_dump(), **override}

    with pytest.raises(ConfigurationError):
        accept_settings(data)


def test_error_message_names_the_field():
    with pytest.raises(ConfigurationError, match="slot_interval_minutes"):
        accept_settings({"slot_interval_minutes": 0})


def test_merge_fills_missing_keys():
    merged = merge_with_defaults({"max_capacity_units": 8})

    assert merged.max_capacity_units == 8
    assert merged.close_time == "19:00"


def test_holidays_sorted_and_deduplicated():
    accepted = accept_settings({"holiday_dates": ["2026-12-31", "2026-11-03", "2026-12-31"]})

    assert accepted.holiday_dates == [date(2026, 11, 3), date(2026, 12, 31)]


def test_partial_update_keeps_other_fields():
    updated = apply_update(DEFAULT_SETTINGS, CapacitySettingsUpdate(close_time="20:00"))

    assert updated.close_time == "20:00"
    assert updated.open_time == "09:00"
    assert updated.max_capacity_units == 6


def test_partial_update_is_validated_as_a_whole():
    with pytest.raises(ConfigurationError):
        apply_update(DEFAULT_SETTINGS, CapacitySettingsUpdate(open_time="20:00"))
