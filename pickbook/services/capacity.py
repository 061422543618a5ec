# pickbook/services/capacity.py
"""
Acceptance of capacity settings.

Invalid settings are refused with ConfigurationError; values are never
silently clamped.
"""

import logging

from pydantic import ValidationError

from ..exceptions import ConfigurationError
from ..schemas.settings import CapacitySettings, CapacitySettingsUpdate
from .slots.config import SlotGridConfig

logger = logging.getLogger(__name__)

DEFAULT_SETTINGS = CapacitySettings()


def _describe(exc: ValidationError) -> str:
    parts = []
    for err in exc.errors():
        loc = ".".join(str(p) for p in err.get("loc", ())) or "settings"
        parts.append(f"{loc}: {err.get('msg')}")
    return "; ".join(parts)


def accept_settings(data: dict) -> CapacitySettings:
    """
    Validate a full settings document.

    Raises:
        ConfigurationError: with a readable description of every problem.
    """
    try:
        accepted = CapacitySettings.model_validate(data)
    except ValidationError as e:
        raise ConfigurationError(_describe(e)) from e

    # Grid-level checks (same ones the engine applies)
    SlotGridConfig.from_settings(accepted)
    return accepted


def merge_with_defaults(stored: dict | None) -> CapacitySettings:
    """Stored document laid over the defaults; missing keys fall back."""
    merged = DEFAULT_SETTINGS.model_dump()
    if stored:
        merged.update(stored)
    return accept_settings(merged)


def apply_update(current: CapacitySettings, update: CapacitySettingsUpdate) -> CapacitySettings:
    """Apply a partial update and re-validate the whole document."""
    merged = current.model_dump()
    merged.update(update.model_dump(exclude_unset=True, exclude_none=True))
    accepted = accept_settings(merged)
    logger.info(
        f"Settings accepted: capacity={accepted.max_capacity_units} "
        f"hours={accepted.open_time}-{accepted.close_time} "
        f"step={accepted.slot_interval_minutes} holidays={len(accepted.holiday_dates)}"
    )
    return accepted
