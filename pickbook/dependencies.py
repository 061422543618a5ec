# pickbook/dependencies.py
# FastAPI dependencies; tests swap them via app.dependency_overrides

from datetime import date, datetime

from .config import settings
from .redis_client import redis_client
from .services.store import ReservationStore


def get_store() -> ReservationStore:
    return ReservationStore(redis_client, settings)


def get_today() -> date:
    return date.today()


def get_now() -> datetime:
    return datetime.now()
