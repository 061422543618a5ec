# pickbook/routers/slots.py
"""
Slots API endpoints.

GET /slots/grid     - business-day grid from current settings
GET /slots/day      - start times for a product on a day
GET /slots/calendar - per-day availability hints
"""

from datetime import date
from fastapi import APIRouter, Depends, HTTPException, Query

from ..config import settings as app_settings
from ..dependencies import get_store, get_today
from ..schemas.slots import (
    DayStatusRead,
    SlotRead,
    SlotsCalendarResponse,
    SlotsDayResponse,
    SlotsGridResponse,
    StartOptionRead,
)
from ..services.catalog import get_product
from ..services.reservations import check_date_policy
from ..services.slots import build_calendar, generate_slots, list_start_options
from ..services.slots.dates import horizon_end
from ..services.store import ReservationStore


router = APIRouter(prefix="/slots", tags=["slots"])


@router.get("/grid", response_model=SlotsGridResponse)
def get_slots_grid(store: ReservationStore = Depends(get_store)):
    """Grid instants for the configured business hours."""
    capacity = store.load_settings()
    slots = [SlotRead.model_validate(s) for s in generate_slots(capacity)]

    return SlotsGridResponse(
        open_time=capacity.open_time,
        close_time=capacity.close_time,
        slot_interval_minutes=capacity.slot_interval_minutes,
        slots=slots,
        total_slots=len(slots),
    )


@router.get("/day", response_model=SlotsDayResponse)
def get_slots_day(
    product_id: str,
    target_date: date = Query(..., alias="date"),
    store: ReservationStore = Depends(get_store),
    today: date = Depends(get_today),
):
    """Start times for a product on a specific day."""
    product = get_product(product_id)
    if not product:
        raise HTTPException(status_code=404, detail="Product not found")

    capacity = store.load_settings()

    policy = check_date_policy(target_date, capacity, today)
    if not policy.admissible:
        raise HTTPException(status_code=400, detail=policy.message)

    reservations = store.load_reservations()
    options = list_start_options(target_date, product, reservations, capacity)

    return SlotsDayResponse(
        date=target_date,
        product_id=product.id,
        duration_minutes=product.duration_minutes,
        required_units=product.required_units,
        max_capacity_units=capacity.max_capacity_units,
        options=[StartOptionRead.model_validate(o) for o in options],
    )


@router.get("/calendar", response_model=SlotsCalendarResponse)
def get_slots_calendar(
    start_date: date | None = None,
    end_date: date | None = None,
    store: ReservationStore = Depends(get_store),
    today: date = Depends(get_today),
):
    """Calendar of days with availability level (advisory only)."""
    capacity = store.load_settings()
    last_day = horizon_end(today, capacity.calendar_horizon_months)

    if start_date is None:
        start_date = today
    if end_date is None:
        end_date = last_day
    if end_date < start_date:
        end_date = start_date
    # one calendar page never spans more than the horizon
    if (end_date - start_date).days > (last_day - today).days:
        end_date = start_date + (last_day - today)

    reservations = store.load_reservations()
    days = build_calendar(
        start_date,
        end_date,
        reservations,
        capacity,
        today,
        limited_below=app_settings.availability_limited_below,
        full_at_or_below=app_settings.availability_full_at_or_below,
    )

    return SlotsCalendarResponse(
        start_date=start_date,
        end_date=end_date,
        days=[DayStatusRead.model_validate(d) for d in days],
        horizon_end=last_day,
        limited_below=app_settings.availability_limited_below,
        full_at_or_below=app_settings.availability_full_at_or_below,
    )
