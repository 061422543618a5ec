# pickbook/routers/audit_log.py
# Read-only: entries are written by the reservation/settings transactions

from fastapi import APIRouter, Depends, Query

from ..dependencies import get_store
from ..schemas.audit_log import AuditLogRead
from ..services.store import ReservationStore

router = APIRouter(prefix="/audit_log", tags=["audit_log"])


@router.get("/", response_model=list[AuditLogRead])
def list_audit_log(
    limit: int = Query(100, ge=1, le=1000),
    store: ReservationStore = Depends(get_store),
):
    return store.load_audit(limit)
