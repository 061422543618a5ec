import pytest

from pickbook.exceptions import ConfigurationError
from pickbook.schemas.settings import CapacitySettings
from pickbook.services.slots import generate_slots, minutes_to_time_str, time_str_to_minutes


def test_time_helpers():
    assert time_str_to_minutes("09:30") == 570
    assert time_str_to_minutes("00:00") == 0
    assert minutes_to_time_str(570) == "09:30"
    assert minutes_to_time_str(1140) == "19:00"


def test_default_grid_covers_business_hours(capacity):
    slots = generate_slots(capacity)

    assert len(slots) == 20
    assert slots[0].label == "09:00"
    assert slots[0].offset_minutes == 540
    assert slots[-1].label == "18:30"


@pytest.mark.parametrize(
    "open_time, close_time, step, expected",
    [
        ("09:00", "10:10", 30, ["09:00", "09:30", "10:00"]),
        ("09:00", "10:00", 25, ["09:00", "09:25", "09:50"]),
        ("09:00", "10:00", 60, ["09:00"]),
        ("09:00", "09:20", 45, ["09:00"]),
    ],
)
def test_grid_never_reaches_close(open_time, close_time, step, expected):
    settings = CapacitySettings(open_time=open_time, close_time=close_time, slot_interval_minutes=step)
    slots = generate_slots(settings)

    assert [s.label for s in slots] == expected
    close_min = time_str_to_minutes(close_time)
    assert all(time_str_to_minutes(open_time) <= s.offset_minutes < close_min for s in slots)


def test_grid_is_restartable(capacity):
    first = generate_slots(capacity)
    second = generate_slots(capacity)

    assert first == second
    assert first is not second


def test_non_positive_interval_is_rejected():
    settings = CapacitySettings.model_construct(slot_interval_minutes=0)

    with pytest.raises(ConfigurationError):
        generate_slots(settings)


def test_inverted_hours_yield_no_slots():
    settings = CapacitySettings.model_construct(open_time="19:00", close_time="09:00")

    assert generate_slots(settings) == []
