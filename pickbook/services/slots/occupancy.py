# pickbook/services/slots/occupancy.py
"""
Capacity consumed at a single instant.

Only confirmed reservations count. Intervals are half-open [start, end):
a reservation ending at 12:00 does not occupy 12:00, so back-to-back
bookings do not collide.
"""

from datetime import date

from .config import time_str_to_minutes


def occupancy_at(target_date: date, offset_minutes: int, reservations) -> int:
    """Sum of required_units of confirmed reservations covering the instant."""
    total = 0
    for r in reservations:
        if r.status != "confirmed" or r.date != target_date:
            continue
        start_min = time_str_to_minutes(r.start_time)
        end_min = time_str_to_minutes(r.end_time)
        if start_min <= offset_minutes < end_min:
            total += r.required_units
    return total


def remaining_at(target_date: date, offset_minutes: int, reservations, capacity_units: int) -> int:
    """Free units at the instant, never negative."""
    return max(0, capacity_units - occupancy_at(target_date, offset_minutes, reservations))
