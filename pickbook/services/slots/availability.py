# pickbook/services/slots/availability.py
"""
Day-level availability.

Advisory only: the ratio and its level feed calendar hints.
Admission is decided by validator.check_booking alone.

  ratio = sum(max(0, capacity - occupancy) over grid) / (len(grid) * capacity)
"""

from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import Optional

from .config import SlotGridConfig, minutes_to_time_str
from .dates import is_past, is_holiday, is_beyond_horizon, date_range
from .grid import generate_slots
from .occupancy import occupancy_at, remaining_at
from .validator import check_booking


class AvailabilityLevel(str, Enum):
    PLENTY = "plenty"
    LIMITED = "limited"
    FULL = "full"


@dataclass(frozen=True)
class StartOption:
    time: str
    end_time: str
    available: bool
    remaining_units: int


@dataclass(frozen=True)
class DayStatus:
    date: date
    bookable: bool
    status: str  # past / holiday / beyond_horizon / plenty / limited / full
    ratio: Optional[float] = None


def daily_availability_ratio(target_date: date, reservations, settings) -> float:
    """Share of the day's capacity still free, in [0, 1]. Empty grid -> 0.0."""
    config = SlotGridConfig.from_settings(settings)
    slots = generate_slots(settings)
    if not slots:
        return 0.0

    total_free = 0
    for slot in slots:
        occupied = occupancy_at(target_date, slot.offset_minutes, reservations)
        total_free += max(0, config.capacity_units - occupied)

    return total_free / (len(slots) * config.capacity_units)


def classify_availability(
    ratio: float,
    limited_below: float = 0.3,
    full_at_or_below: float = 0.0,
) -> AvailabilityLevel:
    if ratio <= full_at_or_below:
        return AvailabilityLevel.FULL
    if ratio < limited_below:
        return AvailabilityLevel.LIMITED
    return AvailabilityLevel.PLENTY


def list_start_options(
    target_date: date,
    product,
    reservations,
    settings,
) -> list[StartOption]:
    """
    Start times offered for a product on a day.

    Only grid slots where the product still finishes by closing time are
    listed; each carries the validator's verdict and free units at that slot.
    """
    config = SlotGridConfig.from_settings(settings)
    options = []

    for slot in generate_slots(settings):
        end_min = slot.offset_minutes + product.duration_minutes
        if end_min > config.close_minutes:
            continue

        check = check_booking(target_date, slot.label, product, reservations, settings)
        options.append(StartOption(
            time=slot.label,
            end_time=minutes_to_time_str(end_min),
            available=check.admissible,
            remaining_units=remaining_at(
                target_date, slot.offset_minutes, reservations, config.capacity_units
            ),
        ))

    return options


def build_calendar(
    start_date: date,
    end_date: date,
    reservations,
    settings,
    today: date,
    limited_below: float = 0.3,
    full_at_or_below: float = 0.0,
) -> list[DayStatus]:
    """Calendar hints for every date in [start_date, end_date]."""
    days = []
    for dt in date_range(start_date, end_date):
        if is_past(dt, today):
            days.append(DayStatus(date=dt, bookable=False, status="past"))
            continue
        if is_holiday(dt, settings):
            days.append(DayStatus(date=dt, bookable=False, status="holiday"))
            continue
        if is_beyond_horizon(dt, today, settings):
            days.append(DayStatus(date=dt, bookable=False, status="beyond_horizon"))
            continue

        ratio = daily_availability_ratio(dt, reservations, settings)
        level = classify_availability(ratio, limited_below, full_at_or_below)
        days.append(DayStatus(
            date=dt,
            bookable=level != AvailabilityLevel.FULL,
            status=level.value,
            ratio=round(ratio, 4),
        ))

    return days
