# pickbook/services/slots/__init__.py
"""
Slot availability and booking validity engine.

Pure functions over (reservations, settings) snapshots; nothing here
reads or writes storage.
"""

from .config import SlotGridConfig, time_str_to_minutes, minutes_to_time_str
from .grid import Slot, generate_slots
from .occupancy import occupancy_at
from .validator import BookingCheck, RejectionReason, check_booking, is_bookable
from .availability import (
    AvailabilityLevel,
    DayStatus,
    StartOption,
    build_calendar,
    classify_availability,
    daily_availability_ratio,
    list_start_options,
)

__all__ = [
    "SlotGridConfig",
    "time_str_to_minutes",
    "minutes_to_time_str",
    "Slot",
    "generate_slots",
    "occupancy_at",
    "BookingCheck",
    "RejectionReason",
    "check_booking",
    "is_bookable",
    "AvailabilityLevel",
    "DayStatus",
    "StartOption",
    "build_calendar",
    "classify_availability",
    "daily_availability_ratio",
    "list_start_options",
]
