# pickbook/services/slots/config.py
"""
Grid configuration and time arithmetic for slots calculation.

All times inside the engine are minute-of-day integers (09:30 -> 570).
"HH:MM" strings exist only at the edges (labels, stored reservations).
"""

from dataclasses import dataclass

from ...exceptions import ConfigurationError


MINUTES_PER_DAY = 24 * 60


def time_str_to_minutes(time_str: str) -> int:
    """Convert "HH:MM" to minute-of-day."""
    hour, minute = time_str.split(":")
    return int(hour) * 60 + int(minute)


def minutes_to_time_str(minutes: int) -> str:
    """Convert minute-of-day to "HH:MM"."""
    return f"{minutes // 60:02d}:{minutes % 60:02d}"


@dataclass(frozen=True)
class SlotGridConfig:
    """
    Resolved grid parameters for one settings snapshot.

    Attributes:
        open_minutes: Opening time, minute-of-day
        close_minutes: Closing time, minute-of-day (exclusive bound)
        step_minutes: Distance between grid instants
        capacity_units: Concurrent capacity shared by all bookings
    """
    open_minutes: int
    close_minutes: int
    step_minutes: int
    capacity_units: int

    def __post_init__(self):
        """Validate configuration."""
        if self.step_minutes <= 0:
            raise ConfigurationError(
                f"slot_interval_minutes must be positive, got {self.step_minutes}"
            )
        if self.capacity_units <= 0:
            raise ConfigurationError(
                f"max_capacity_units must be positive, got {self.capacity_units}"
            )

    @classmethod
    def from_settings(cls, settings) -> "SlotGridConfig":
        """Build from a CapacitySettings snapshot."""
        return cls(
            open_minutes=time_str_to_minutes(settings.open_time),
            close_minutes=time_str_to_minutes(settings.close_time),
            step_minutes=settings.slot_interval_minutes,
            capacity_units=settings.max_capacity_units,
        )

    @property
    def business_minutes(self) -> int:
        return max(0, self.close_minutes - self.open_minutes)
