"""
Pickbook exceptions.

Booking rejections are NOT exceptions: they are returned as values
(see services.slots.validator.BookingCheck).
"""


class PickbookError(Exception):
    """Base exception for the reservation service."""
    pass


class ConfigurationError(PickbookError, ValueError):
    """Capacity settings were rejected (non-positive interval, close <= open, ...)."""
    pass


class PersistenceFailure(PickbookError):
    """The key-value store could not be read or written."""
    pass


class ConcurrentModification(PersistenceFailure):
    """Optimistic transaction kept losing the race and gave up."""
    pass


class ReservationNotFound(PickbookError):
    def __init__(self, reservation_id: str):
        super().__init__(f"Reservation {reservation_id} not found")
        self.reservation_id = reservation_id


class InvalidTransition(PickbookError):
    """Status change not allowed (only confirmed -> cancelled, not after the date)."""

    def __init__(self, reservation_id: str, status: str, reason: str = ""):
        super().__init__(
            f"Reservation {reservation_id} is {status}, cannot cancel"
            + (f": {reason}" if reason else "")
        )
        self.reservation_id = reservation_id
        self.status = status
