import uuid
from datetime import date

import pytest

from pickbook.exceptions import InvalidTransition, ReservationNotFound
from pickbook.schemas.reservations import CustomerInfo, ReservationStatus
from pickbook.schemas.settings import CapacitySettings
from pickbook.services.catalog import get_product
from pickbook.services.reservations import (
    active_reservations,
    admit_booking,
    cancel_reservation,
    delete_reservation,
    new_reservation_id,
)
from pickbook.services.slots import RejectionReason

from tests.conftest import DAY, NOW, TODAY


@pytest.fixture
def customer():
    return CustomerInfo(name="  Sato  ", phone="090-0000-0000", note="")


def admit(start, product, reservations, settings, on=DAY, customer=None):
    customer = customer or CustomerInfo(name="Sato", phone="090")
    return admit_booking(on, start, product, customer, reservations, settings, today=TODAY, now=NOW)


def test_admission_snapshots_product(capacity, half, customer):
    admission = admit_booking(DAY, "10:00", half, customer, [], capacity, today=TODAY, now=NOW)

    assert admission.admitted
    r = admission.reservation
    assert r.start_time == "10:00"
    assert r.end_time == "12:00"
    assert r.product_id == "half"
    assert r.product_name == half.name
    assert r.required_units == 3
    assert r.status == ReservationStatus.CONFIRMED
    assert r.created_at == NOW
    assert r.name == "Sato"
    assert r.note is None
    assert admission.reservations == [r]


def test_admission_appends_without_touching_input(capacity, half, make_reservation):
    existing = [make_reservation("14:00", "15:00", 1)]

    admission = admit("10:00", half, existing, capacity)

    assert len(existing) == 1
    assert admission.reservations[0] is existing[0]
    assert admission.reservations[-1] is admission.reservation


def test_capacity_scenario(capacity, half, quarter):
    first = admit("10:00", half, [], capacity)
    second = admit("10:30", half, first.reservations, capacity)
    third = admit("11:00", quarter, second.reservations, capacity)

    assert first.admitted
    assert second.admitted
    assert not third.admitted
    assert third.check.reason == RejectionReason.CAPACITY_EXCEEDED
    assert third.reservations is None


def test_holiday_rejected_on_empty_day(half):
    settings = CapacitySettings(holiday_dates=[DAY])

    admission = admit("10:00", half, [], settings)

    assert admission.check.reason == RejectionReason.HOLIDAY


def test_past_date_rejected(capacity, half):
    admission = admit("10:00", half, [], capacity, on=date(2026, 10, 16))

    assert admission.check.reason == RejectionReason.PAST_DATE


def test_today_is_still_bookable(capacity, half):
    assert admit("10:00", half, [], capacity, on=TODAY).admitted


def test_beyond_horizon_rejected(capacity, half):
    admission = admit("10:00", half, [], capacity, on=date(2027, 1, 18))

    assert admission.check.reason == RejectionReason.BEYOND_HORIZON


def test_after_hours_rejected_regardless_of_capacity(capacity):
    admission = admit("18:00", get_product("pick-guide-full"), [], capacity)

    assert admission.check.reason == RejectionReason.AFTER_HOURS


def test_ids_are_time_ordered_uuid7():
    earlier = new_reservation_id(now_ms=1_700_000_000_000)
    later = new_reservation_id(now_ms=1_700_000_000_001)

    assert uuid.UUID(earlier).version == 7
    assert uuid.UUID(earlier).variant == uuid.RFC_4122
    assert earlier < later


def test_ids_unique_within_snapshot(capacity, quarter):
    reservations = []
    for start in ("09:00", "09:00", "10:00", "11:00"):
        reservations = admit(start, quarter, reservations, capacity).reservations

    assert len({r.id for r in reservations}) == 4


def test_cancel_keeps_record_and_releases_capacity(capacity, half, make_reservation):
    booked = make_reservation("10:00", "12:00", 6)
    other = make_reservation("13:00", "14:00", 1)

    updated, cancelled = cancel_reservation([booked, other], booked.id, TODAY)

    assert cancelled.status == ReservationStatus.CANCELLED
    assert [r.id for r in updated] == [booked.id, other.id]
    assert booked.status == ReservationStatus.CONFIRMED
    assert admit("10:00", half, updated, capacity).admitted


def test_cancel_is_one_way(make_reservation):
    booked = make_reservation("10:00", "12:00", 2, status=ReservationStatus.CANCELLED)

    with pytest.raises(InvalidTransition):
        cancel_reservation([booked], booked.id, TODAY)


def test_past_reservation_cannot_be_cancelled(make_reservation):
    past = make_reservation("10:00", "12:00", 2, on=date(2026, 10, 1))

    with pytest.raises(InvalidTransition, match="in the past"):
        cancel_reservation([past], past.id, TODAY)

    updated, removed = delete_reservation([past], past.id)
    assert updated == []
    assert removed.id == past.id


def test_reservation_for_today_can_still_be_cancelled(make_reservation):
    booked = make_reservation("10:00", "12:00", 2, on=TODAY)

    _, cancelled = cancel_reservation([booked], booked.id, TODAY)

    assert cancelled.status == ReservationStatus.CANCELLED


def test_cancel_unknown_id(make_reservation):
    with pytest.raises(ReservationNotFound):
        cancel_reservation([make_reservation("10:00", "12:00", 2)], "missing", TODAY)


def test_delete_removes_record(make_reservation):
    a = make_reservation("10:00", "12:00", 2)
    b = make_reservation("13:00", "14:00", 1, status=ReservationStatus.CANCELLED)

    updated, removed = delete_reservation([a, b], b.id)

    assert updated == [a]
    assert removed == b

    with pytest.raises(ReservationNotFound):
        delete_reservation(updated, b.id)


def test_active_reservations_sorted(make_reservation):
    later = make_reservation("09:00", "10:00", 1, on=date(2026, 10, 22))
    afternoon = make_reservation("15:00", "16:00", 1)
    morning = make_reservation("09:00", "10:00", 1)
    gone = make_reservation("08:00", "09:00", 1, status=ReservationStatus.CANCELLED)

    assert active_reservations([later, afternoon, gone, morning]) == [morning, afternoon, later]
