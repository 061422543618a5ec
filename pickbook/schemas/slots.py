# pickbook/schemas/slots.py
"""
Pydantic schemas for slots API.
"""

from datetime import date
from typing import Optional
from pydantic import BaseModel, Field


class SlotRead(BaseModel):
    """Single grid instant."""
    offset_minutes: int = Field(description="Minute of day (09:30 -> 570)")
    label: str  # "HH:MM"

    model_config = {"from_attributes": True}


class SlotsGridResponse(BaseModel):
    open_time: str
    close_time: str
    slot_interval_minutes: int
    slots: list[SlotRead]
    total_slots: int


class StartOptionRead(BaseModel):
    time: str  # "HH:MM"
    end_time: str
    available: bool
    remaining_units: int

    model_config = {"from_attributes": True}


class SlotsDayResponse(BaseModel):
    """Start times for a product on one day."""
    date: date
    product_id: str
    duration_minutes: int
    required_units: int
    max_capacity_units: int
    options: list[StartOptionRead]

    model_config = {"from_attributes": True}


class DayStatusRead(BaseModel):
    """Status of a single day in calendar."""
    date: date
    bookable: bool
    status: str = Field(description="past | holiday | beyond_horizon | plenty | limited | full")
    ratio: Optional[float] = None

    model_config = {"from_attributes": True}


class SlotsCalendarResponse(BaseModel):
    start_date: date
    end_date: date
    days: list[DayStatusRead]

    # Metadata
    horizon_end: date
    limited_below: float
    full_at_or_below: float

    model_config = {"from_attributes": True}
