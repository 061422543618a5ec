# pickbook/services/slots/validator.py
"""
Booking admissibility against the shared capacity.

Checks, in order:
  1. start is not before opening time and sits on the grid
  2. start + duration does not pass closing time
  3. every grid-stepped instant in [start, end) has room for the product

All-or-nothing: one failing instant rejects the whole booking.
Past dates, holidays and the booking horizon are date policy and are
applied by the caller (see dates.py / services.reservations).
"""

from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import Optional

from .config import SlotGridConfig, time_str_to_minutes, minutes_to_time_str
from .occupancy import occupancy_at


class RejectionReason(str, Enum):
    PAST_DATE = "past_date"
    HOLIDAY = "holiday"
    BEYOND_HORIZON = "beyond_horizon"
    BEFORE_OPEN = "before_open"
    OFF_GRID = "off_grid"
    AFTER_HOURS = "after_hours"
    CAPACITY_EXCEEDED = "capacity_exceeded"


@dataclass(frozen=True)
class BookingCheck:
    admissible: bool
    reason: Optional[RejectionReason] = None
    conflict_time: Optional[str] = None  # "HH:MM" of first over-capacity instant
    message: str = ""

    @classmethod
    def ok(cls) -> "BookingCheck":
        return cls(admissible=True)

    @classmethod
    def rejected(
        cls,
        reason: RejectionReason,
        message: str,
        conflict_time: Optional[str] = None,
    ) -> "BookingCheck":
        return cls(
            admissible=False,
            reason=reason,
            conflict_time=conflict_time,
            message=message,
        )


def check_booking(
    target_date: date,
    start_time: str,
    product,
    reservations,
    settings,
) -> BookingCheck:
    """
    Decide whether product can start at start_time on target_date.

    Returns:
        BookingCheck; rejection is a normal result, not an exception.
    """
    config = SlotGridConfig.from_settings(settings)
    start_min = time_str_to_minutes(start_time)
    end_min = start_min + product.duration_minutes

    if start_min < config.open_minutes:
        return BookingCheck.rejected(
            RejectionReason.BEFORE_OPEN,
            f"{start_time} is before opening time {settings.open_time}",
        )

    # the capacity walk only samples grid instants
    if (start_min - config.open_minutes) % config.step_minutes != 0:
        return BookingCheck.rejected(
            RejectionReason.OFF_GRID,
            f"{start_time} is not a slot start "
            f"(every {config.step_minutes} min from {settings.open_time})",
        )

    if end_min > config.close_minutes:
        return BookingCheck.rejected(
            RejectionReason.AFTER_HOURS,
            f"{product.name} starting {start_time} would end at "
            f"{minutes_to_time_str(end_min)}, after closing time {settings.close_time}",
        )

    # Last stepped instant < end is checked too, so a duration that is not
    # a multiple of the step still has its trailing partial slot validated.
    t = start_min
    while t < end_min:
        occupied = occupancy_at(target_date, t, reservations)
        if occupied + product.required_units > config.capacity_units:
            conflict = minutes_to_time_str(t)
            return BookingCheck.rejected(
                RejectionReason.CAPACITY_EXCEEDED,
                f"Not enough capacity at {conflict}: {occupied} of "
                f"{config.capacity_units} units taken, {product.required_units} needed",
                conflict_time=conflict,
            )
        t += config.step_minutes

    return BookingCheck.ok()


def is_bookable(
    target_date: date,
    start_time: str,
    product,
    reservations,
    settings,
) -> bool:
    return check_booking(target_date, start_time, product, reservations, settings).admissible
