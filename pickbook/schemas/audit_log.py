from datetime import datetime
from typing import Optional
from pydantic import BaseModel


class AuditLogRead(BaseModel):
    event_type: str
    reservation_id: Optional[str] = None
    payload: Optional[dict] = None
    created_at: datetime

    model_config = {"from_attributes": True}
