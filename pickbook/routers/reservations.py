# pickbook/routers/reservations.py
# PATCH = 405; DELETE = ALLOWED (hard, operator override); cancel is POST /{id}/cancel

from datetime import date, datetime

from fastapi import APIRouter, Depends, HTTPException, status

from ..dependencies import get_now, get_store, get_today
from ..exceptions import InvalidTransition, ReservationNotFound
from ..schemas.reservations import (
    BookingRejection,
    CustomerInfo,
    Reservation,
    ReservationCreate,
)
from ..services.catalog import get_product
from ..services.reservations import (
    active_reservations,
    admit_booking,
    cancel_reservation,
    delete_reservation,
    find_reservation,
)
from ..services.store import Mutation, ReservationStore, audit_entry

router = APIRouter(prefix="/reservations", tags=["reservations"])


@router.get("/", response_model=list[Reservation])
def list_reservations(
    include_cancelled: bool = False,
    store: ReservationStore = Depends(get_store),
):
    reservations = store.load_reservations()
    if include_cancelled:
        return reservations
    return active_reservations(reservations)


@router.get("/{id}", response_model=Reservation)
def get_reservation(id: str, store: ReservationStore = Depends(get_store)):
    try:
        return find_reservation(store.load_reservations(), id)
    except ReservationNotFound:
        raise HTTPException(status_code=404, detail="Not found")


@router.post(
    "/",
    response_model=Reservation,
    status_code=status.HTTP_201_CREATED,
    responses={409: {"model": BookingRejection}},
)
def create_reservation(
    data: ReservationCreate,
    store: ReservationStore = Depends(get_store),
    today: date = Depends(get_today),
    now: datetime = Depends(get_now),
):
    product = get_product(data.product_id)
    if not product:
        raise HTTPException(status_code=404, detail="Product not found")

    customer = CustomerInfo(name=data.name, phone=data.phone, note=data.note)

    def mutate(reservations, capacity):
        admission = admit_booking(
            data.date,
            data.start_time,
            product,
            customer,
            reservations,
            capacity,
            today=today,
            now=now,
        )
        if not admission.admitted:
            return Mutation(result=admission)
        return Mutation(
            result=admission,
            reservations=admission.reservations,
            audit=(audit_entry("reservation_created", admission.reservation),),
        )

    admission = store.apply(mutate)

    if not admission.admitted:
        check = admission.check
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=BookingRejection(
                reason=check.reason.value,
                message=check.message,
                conflict_time=check.conflict_time,
            ).model_dump(),
        )

    return admission.reservation


@router.post("/{id}/cancel", response_model=Reservation)
def cancel(
    id: str,
    store: ReservationStore = Depends(get_store),
    today: date = Depends(get_today),
):
    def mutate(reservations, capacity):
        updated, cancelled = cancel_reservation(reservations, id, today)
        return Mutation(
            result=cancelled,
            reservations=updated,
            audit=(audit_entry("reservation_cancelled", cancelled),),
        )

    try:
        return store.apply(mutate)
    except ReservationNotFound:
        raise HTTPException(status_code=404, detail="Not found")
    except InvalidTransition as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))


@router.patch("/{id}")
def patch_not_allowed():
    raise HTTPException(
        status_code=status.HTTP_405_METHOD_NOT_ALLOWED,
        detail="Method not allowed",
    )


@router.delete("/{id}", status_code=status.HTTP_204_NO_CONTENT)
def delete(id: str, store: ReservationStore = Depends(get_store)):
    def mutate(reservations, capacity):
        updated, removed = delete_reservation(reservations, id)
        return Mutation(
            result=removed,
            reservations=updated,
            audit=(audit_entry("reservation_deleted", removed),),
        )

    try:
        store.apply(mutate)
    except ReservationNotFound:
        raise HTTPException(status_code=404, detail="Not found")
