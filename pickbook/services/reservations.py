# pickbook/services/reservations.py
"""
Reservation lifecycle on immutable snapshots.

Every operation takes the current list and returns a new one; the store
decides whether the result gets committed.

Status machine:
  confirmed -> cancelled   (record kept, capacity released; today or later only)
  confirmed -> deleted     (operator override, record removed)
"""

import logging
import secrets
import time
import uuid
from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..exceptions import ReservationNotFound, InvalidTransition
from ..schemas.reservations import CustomerInfo, Reservation, ReservationStatus
from .slots.config import time_str_to_minutes, minutes_to_time_str
from .slots.dates import is_past, is_holiday, is_beyond_horizon, horizon_end
from .slots.validator import BookingCheck, RejectionReason, check_booking

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Admission:
    """Outcome of admit_booking: either a new reservation or a rejection."""
    check: BookingCheck
    reservation: Optional[Reservation] = None
    reservations: Optional[list[Reservation]] = None

    @property
    def admitted(self) -> bool:
        return self.reservation is not None


def new_reservation_id(now_ms: int | None = None) -> str:
    """
    Time-ordered id in UUIDv7 layout.

    48 bits unix milliseconds, then random bits; ids sort by creation time.
    """
    ms = int(time.time() * 1000) if now_ms is None else now_ms
    value = (
        (ms & ((1 << 48) - 1)) << 80
        | 0x7 << 76
        | secrets.randbits(12) << 64
        | 0b10 << 62
        | secrets.randbits(62)
    )
    return str(uuid.UUID(int=value))


def _unique_id(reservations: list[Reservation]) -> str:
    taken = {r.id for r in reservations}
    while True:
        candidate = new_reservation_id()
        if candidate not in taken:
            return candidate


def check_date_policy(target_date: date, settings, today: date) -> BookingCheck:
    """Past / holiday / horizon checks; the validator does not know the clock."""
    if is_past(target_date, today):
        return BookingCheck.rejected(
            RejectionReason.PAST_DATE,
            f"{target_date.isoformat()} is in the past",
        )
    if is_holiday(target_date, settings):
        return BookingCheck.rejected(
            RejectionReason.HOLIDAY,
            f"{target_date.isoformat()} is a holiday",
        )
    if is_beyond_horizon(target_date, today, settings):
        last = horizon_end(today, settings.calendar_horizon_months)
        return BookingCheck.rejected(
            RejectionReason.BEYOND_HORIZON,
            f"Bookings are open until {last.isoformat()}",
        )
    return BookingCheck.ok()


def admit_booking(
    target_date: date,
    start_time: str,
    product,
    customer: CustomerInfo,
    reservations: list[Reservation],
    settings,
    today: date,
    now: datetime | None = None,
) -> Admission:
    """
    Validate and, if admissible, build the new reservation.

    Returns:
        Admission with the new reservation and the new list (appended in
        arrival order), or with the rejecting BookingCheck.
    """
    check = check_date_policy(target_date, settings, today)
    if check.admissible:
        check = check_booking(target_date, start_time, product, reservations, settings)

    if not check.admissible:
        logger.warning(
            f"Booking rejected: {product.id} {target_date} {start_time} "
            f"reason={check.reason.value}"
        )
        return Admission(check=check)

    end_min = time_str_to_minutes(start_time) + product.duration_minutes
    reservation = Reservation(
        id=_unique_id(reservations),
        date=target_date,
        start_time=start_time,
        end_time=minutes_to_time_str(end_min),
        product_id=product.id,
        product_name=product.name,
        required_units=product.required_units,
        name=customer.name,
        phone=customer.phone,
        note=customer.note or None,
        status=ReservationStatus.CONFIRMED,
        created_at=now or datetime.now(),
    )
    logger.info(
        f"Booking admitted: {reservation.id} {product.id} "
        f"{target_date} {reservation.start_time}-{reservation.end_time}"
    )
    return Admission(
        check=check,
        reservation=reservation,
        reservations=[*reservations, reservation],
    )


def find_reservation(reservations: list[Reservation], reservation_id: str) -> Reservation:
    for r in reservations:
        if r.id == reservation_id:
            return r
    raise ReservationNotFound(reservation_id)


def cancel_reservation(
    reservations: list[Reservation],
    reservation_id: str,
    today: date,
) -> tuple[list[Reservation], Reservation]:
    """
    confirmed -> cancelled. The record stays for history.

    Reservations dated before today are closed; the operator removes
    them with delete_reservation instead.

    Raises:
        ReservationNotFound, InvalidTransition
    """
    target = find_reservation(reservations, reservation_id)
    if target.status != ReservationStatus.CONFIRMED:
        raise InvalidTransition(reservation_id, target.status.value)
    if is_past(target.date, today):
        raise InvalidTransition(
            reservation_id,
            target.status.value,
            reason=f"{target.date.isoformat()} is in the past",
        )

    cancelled = target.model_copy(update={"status": ReservationStatus.CANCELLED})
    updated = [cancelled if r.id == reservation_id else r for r in reservations]
    logger.info(f"Reservation cancelled: {reservation_id}")
    return updated, cancelled


def delete_reservation(
    reservations: list[Reservation],
    reservation_id: str,
) -> tuple[list[Reservation], Reservation]:
    """Operator hard delete. Raises ReservationNotFound."""
    target = find_reservation(reservations, reservation_id)
    updated = [r for r in reservations if r.id != reservation_id]
    logger.info(f"Reservation deleted: {reservation_id} (was {target.status.value})")
    return updated, target


def active_reservations(reservations: list[Reservation]) -> list[Reservation]:
    """Confirmed reservations ordered by date, then start time."""
    return sorted(
        (r for r in reservations if r.status == ReservationStatus.CONFIRMED),
        key=lambda r: (r.date, r.start_time),
    )
