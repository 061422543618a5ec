# pickbook/schemas/reservations.py

from datetime import date, datetime
from enum import Enum
from typing import Optional
from pydantic import BaseModel, Field

from .settings import TIME_PATTERN


class ReservationStatus(str, Enum):
    CONFIRMED = "confirmed"
    CANCELLED = "cancelled"


class CustomerInfo(BaseModel):
    name: str = Field(min_length=1)
    phone: str = Field(min_length=1)
    note: Optional[str] = None

    model_config = {"str_strip_whitespace": True}


class Reservation(BaseModel):
    """
    Stored booking.

    product_name / required_units are a snapshot taken at booking time;
    later catalog changes do not alter existing reservations.
    """
    id: str
    date: date
    start_time: str
    end_time: str

    product_id: str
    product_name: str
    required_units: int

    name: str
    phone: str
    note: Optional[str] = None

    status: ReservationStatus = ReservationStatus.CONFIRMED
    created_at: datetime

    model_config = {"from_attributes": True, "frozen": True}


class ReservationCreate(CustomerInfo):
    date: date
    start_time: str = Field(pattern=TIME_PATTERN)
    product_id: str


class BookingRejection(BaseModel):
    reason: str
    message: str
    conflict_time: Optional[str] = None
