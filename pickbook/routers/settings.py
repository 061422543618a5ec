# pickbook/routers/settings.py
# Single settings document: GET + PUT (partial), no POST/DELETE

from fastapi import APIRouter, Depends, HTTPException

from ..dependencies import get_store
from ..exceptions import ConfigurationError
from ..schemas.settings import CapacitySettings, CapacitySettingsUpdate
from ..services.capacity import apply_update
from ..services.store import Mutation, ReservationStore, audit_entry

router = APIRouter(prefix="/settings", tags=["settings"])


@router.get("/", response_model=CapacitySettings)
def get_settings(store: ReservationStore = Depends(get_store)):
    return store.load_settings()


@router.put("/", response_model=CapacitySettings)
def update_settings(
    data: CapacitySettingsUpdate,
    store: ReservationStore = Depends(get_store),
):
    def mutate(reservations, current):
        accepted = apply_update(current, data)
        return Mutation(
            result=accepted,
            settings=accepted,
            audit=(audit_entry("settings_updated", payload=accepted.model_dump(mode="json")),),
        )

    try:
        return store.apply(mutate)
    except ConfigurationError as e:
        raise HTTPException(
            status_code=422,
            detail=str(e),
        )
