# tests/conftest.py
from datetime import datetime, timezone

import pytest
from fastapi.testclient import TestClient

from lendrate.api.http import app, get_engine
from lendrate.services.catalog import RateCatalog
from lendrate.services.pricing_engine import PricingEngine

from fixtures.offers import StubProvider, record

FIXED_NOW = datetime(2026, 1, 15, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def stub_provider():
    return StubProvider({"dscr": [record()]})


@pytest.fixture
def engine(stub_provider):
    catalog = RateCatalog(providers={"stub": stub_provider})
    return PricingEngine(catalog, clock=lambda: FIXED_NOW)


@pytest.fixture
def client(engine):
    app.dependency_overrides[get_engine] = lambda: engine
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()
