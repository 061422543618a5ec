# pickbook/services/slots/grid.py
"""
Slot grid generation.

Produces the ordered start instants of a business day:
  open, open + step, open + 2*step, ... while instant < close

The loop stops on minute-of-day comparison, not on a slot count, so a
window that is not an exact multiple of the step never overshoots close.
"""

from dataclasses import dataclass

from .config import SlotGridConfig, minutes_to_time_str


@dataclass(frozen=True)
class Slot:
    offset_minutes: int  # minute-of-day
    label: str           # "HH:MM"


def iter_grid_minutes(config: SlotGridConfig):
    """Yield grid instants (minute-of-day) for one day."""
    t = config.open_minutes
    while t < config.close_minutes:
        yield t
        t += config.step_minutes


def generate_slots(settings) -> list[Slot]:
    """
    Generate the slot grid for a settings snapshot.

    Returns:
        Fresh list of Slot. Empty when open >= close.

    Raises:
        ConfigurationError: non-positive interval or capacity.
    """
    config = SlotGridConfig.from_settings(settings)
    return [
        Slot(offset_minutes=t, label=minutes_to_time_str(t))
        for t in iter_grid_minutes(config)
    ]
