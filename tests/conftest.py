from datetime import date, datetime

import fakeredis
import pytest

from pickbook.config import Settings
from pickbook.schemas.reservations import Reservation, ReservationStatus
from pickbook.schemas.settings import CapacitySettings
from pickbook.services.catalog import get_product
from pickbook.services.store import ReservationStore

TODAY = date(2026, 10, 17)
NOW = datetime(2026, 10, 17, 8, 30)
DAY = date(2026, 10, 20)


@pytest.fixture
def capacity():
    # 6 units, 09:00-19:00, 30 min grid
    return CapacitySettings()


@pytest.fixture
def half():
    return get_product("half")


@pytest.fixture
def quarter():
    return get_product("quarter")


@pytest.fixture
def make_reservation():
    counter = {"n": 0}

    def _make(
        start_time,
        end_time,
        units,
        on=DAY,
        status=ReservationStatus.CONFIRMED,
        product_id="custom",
    ):
        counter["n"] += 1
        return Reservation(
            id=f"r{counter['n']}",
            date=on,
            start_time=start_time,
            end_time=end_time,
            product_id=product_id,
            product_name=product_id,
            required_units=units,
            name="Test Customer",
            phone="+81000000000",
            status=status,
            created_at=NOW,
        )

    return _make


@pytest.fixture
def app_config():
    return Settings(redis_url="redis://unused", store_max_retries=3)


@pytest.fixture
def fake_redis():
    return fakeredis.FakeRedis(decode_responses=True)


@pytest.fixture
def store(fake_redis, app_config):
    return ReservationStore(fake_redis, app_config)


@pytest.fixture
def client(store):
    from fastapi.testclient import TestClient

    from pickbook.dependencies import get_now, get_store, get_today
    from pickbook.main import app

    app.dependency_overrides[get_store] = lambda: store
    app.dependency_overrides[get_today] = lambda: TODAY
    app.dependency_overrides[get_now] = lambda: NOW
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()
