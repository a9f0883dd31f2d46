"""
Pytest configuration and fixtures.

- Settings pointing at a per-test SQLite file
- FastAPI TestClient built through the application factory
- Ready-made rates and delivery options for solver tests
"""

import pytest
from fastapi.testclient import TestClient

from cambio.core.config import Settings
from cambio.db.dal import Database
from cambio.db.migrate import apply_migrations
from cambio.main import create_app
from cambio.services.quotes import (
    CurrencyCode,
    DeliveryOption,
    ExchangeRate,
    get_delivery_option,
)

ADMIN_PASSWORD = "s3cret"


# =============================================================================
# APP / DATABASE FIXTURES
# =============================================================================

@pytest.fixture
def settings(tmp_path) -> Settings:
    return Settings(
        data_dir=tmp_path,
        db_path=tmp_path / "test.sqlite3",
        admin_password=ADMIN_PASSWORD,
    )


@pytest.fixture
def client(settings) -> TestClient:
    return TestClient(create_app(settings_override=settings))


@pytest.fixture
def db(tmp_path) -> Database:
    path = tmp_path / "rates.sqlite3"
    apply_migrations(path)
    return Database(path)


@pytest.fixture
def publish(client):
    def _publish(**rates):
        resp = client.post("/rates", json={"password": ADMIN_PASSWORD, **rates})
        assert resp.status_code == 200, resp.text
        return resp.json()

    return _publish


# =============================================================================
# ENGINE FIXTURES
# =============================================================================

@pytest.fixture
def pyg_rate() -> ExchangeRate:
    return ExchangeRate(CurrencyCode.PYG, 1450.0)


@pytest.fixture
def usd_rate() -> ExchangeRate:
    return ExchangeRate(CurrencyCode.USD, 5.50)


@pytest.fixture
def free_delivery() -> DeliveryOption:
    return get_delivery_option("franco")


@pytest.fixture
def km7_delivery() -> DeliveryOption:
    return get_delivery_option("km7")
