from datetime import date

from pickbook.schemas.reservations import ReservationStatus
from pickbook.services.slots import occupancy_at, time_str_to_minutes
from pickbook.services.slots.occupancy import remaining_at

from tests.conftest import DAY


def at(label):
    return time_str_to_minutes(label)


def test_empty_calendar_has_no_occupancy():
    assert occupancy_at(DAY, at("10:00"), []) == 0


def test_sums_overlapping_confirmed_reservations(make_reservation):
    reservations = [
        make_reservation("10:00", "12:00", 3),
        make_reservation("11:00", "13:00", 2),
    ]

    assert occupancy_at(DAY, at("10:30"), reservations) == 3
    assert occupancy_at(DAY, at("11:00"), reservations) == 5
    assert occupancy_at(DAY, at("12:30"), reservations) == 2


def test_interval_is_half_open(make_reservation):
    reservations = [make_reservation("10:00", "12:00", 3)]

    assert occupancy_at(DAY, at("10:00"), reservations) == 3
    assert occupancy_at(DAY, at("11:59"), reservations) == 3
    assert occupancy_at(DAY, at("12:00"), reservations) == 0
    assert occupancy_at(DAY, at("09:59"), reservations) == 0


def test_ignores_cancelled_and_other_dates(make_reservation):
    reservations = [
        make_reservation("10:00", "12:00", 3, status=ReservationStatus.CANCELLED),
        make_reservation("10:00", "12:00", 2, on=date(2026, 10, 21)),
    ]

    assert occupancy_at(DAY, at("10:00"), reservations) == 0


def test_occupancy_grows_with_covering_reservations(make_reservation):
    reservations = []
    previous = 0
    for units in (1, 2, 3):
        reservations.append(make_reservation("09:00", "11:00", units))
        current = occupancy_at(DAY, at("10:00"), reservations)
        assert current >= previous
        previous = current

    assert previous == 6


def test_remaining_never_negative(make_reservation):
    # capacity lowered after bookings were taken
    reservations = [make_reservation("10:00", "12:00", 5)]

    assert remaining_at(DAY, at("10:00"), reservations, 4) == 0
    assert remaining_at(DAY, at("12:00"), reservations, 4) == 4
