"""Shared test fixtures and fakes."""

from __future__ import annotations

import os

# Settings are read at import time; point them at an in-memory database
# before any application module is imported.
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["ENVIRONMENT"] = "test"
for _name in ("SITE_URL", "CLIENT_URL", "HEALTH_ROUTE", "SITEMAP_CACHE_TTL_MS"):
    os.environ.pop(_name, None)

import pytest

from app.core.database import SessionLocal, engine
from app.models import Base
from app.services.sitemap_builder import CatalogItem


class FakeCatalog:
    """In-memory catalog that counts lookups."""

    def __init__(self, items: list[CatalogItem] | None = None) -> None:
        self.items = list(items or [])
        self.calls = 0
        self.error: Exception | None = None

    def list_items(self) -> list[CatalogItem]:
        self.calls += 1
        if self.error is not None:
            raise self.error
        return list(self.items)


class FakeClock:
    """Manually advanced millisecond clock."""

    def __init__(self, now: float = 0.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now


@pytest.fixture
def db_session():
    Base.metadata.create_all(bind=engine)
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def fake_catalog() -> FakeCatalog:
    return FakeCatalog()


@pytest.fixture
def fake_clock() -> FakeClock:
    return FakeClock()
