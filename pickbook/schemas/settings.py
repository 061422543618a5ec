# pickbook/schemas/settings.py
"""
Operator-controlled capacity settings (one persisted document).
"""

from datetime import date
from pydantic import BaseModel, Field, field_validator, model_validator

TIME_PATTERN = r"^([01]\d|2[0-3]):[0-5]\d$"


class CapacitySettings(BaseModel):
    max_capacity_units: int = Field(6, gt=0)
    open_time: str = Field("09:00", pattern=TIME_PATTERN)
    close_time: str = Field("19:00", pattern=TIME_PATTERN)
    slot_interval_minutes: int = Field(30, gt=0)
    calendar_horizon_months: int = Field(3, gt=0)
    holiday_dates: list[date] = []

    model_config = {"from_attributes": True, "frozen": True}

    @field_validator("holiday_dates")
    @classmethod
    def _sorted_unique(cls, v: list[date]) -> list[date]:
        return sorted(set(v))

    @model_validator(mode="after")
    def _close_after_open(self):
        # zero-padded "HH:MM" compares correctly as text
        if self.close_time <= self.open_time:
            raise ValueError(
                f"close_time {self.close_time} must be after open_time {self.open_time}"
            )
        return self


class CapacitySettingsUpdate(BaseModel):
    """Partial update from the settings editor; omitted fields keep their value."""
    max_capacity_units: int | None = None
    open_time: str | None = None
    close_time: str | None = None
    slot_interval_minutes: int | None = None
    calendar_horizon_months: int | None = None
    holiday_dates: list[date] | None = None
