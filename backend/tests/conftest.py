"""Shared test configuration and fixtures.

Every test gets a freshly created schema on its own engine. By default that is
an in-memory SQLite database; set ``TEST_DATABASE_URL`` to an asyncpg URL to
run the same suite against PostgreSQL.
"""

from collections.abc import AsyncGenerator, Callable
from decimal import Decimal
from typing import Any

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from app.api.deps import get_property_service
from app.config import settings
from app.database import Base, build_engine, build_session_factory
from app.main import app
from app.models.property import PropertyStatus, PropertyType
from app.repositories.property_repository import PropertyRepository
from app.repositories.property_store import PropertyStore
from app.schemas.property import ImageCreate, PropertyCreate
from app.services.property_service import PropertyService

# ---------------------------------------------------------------------------
# Per-test database
# ---------------------------------------------------------------------------


@pytest_asyncio.fixture
async def test_engine() -> AsyncGenerator[AsyncEngine, None]:
    """Create the schema on a fresh engine and drop it afterwards."""
    engine = build_engine(settings.test_database_url)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
def session_factory(test_engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return build_session_factory(test_engine)


@pytest.fixture
def store(session_factory: async_sessionmaker[AsyncSession]) -> PropertyStore:
    return PropertyStore(session_factory)


@pytest.fixture
def repository(store: PropertyStore) -> PropertyRepository:
    return PropertyRepository(store)


@pytest.fixture
def service(repository: PropertyRepository) -> PropertyService:
    return PropertyService(repository)


@pytest_asyncio.fixture
async def client(service: PropertyService) -> AsyncGenerator[AsyncClient, None]:
    """Provide an httpx AsyncClient wired to the test database."""
    app.dependency_overrides[get_property_service] = lambda: service

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://testserver") as ac:
        yield ac

    app.dependency_overrides.clear()


# ---------------------------------------------------------------------------
# Data helpers
# ---------------------------------------------------------------------------


def _property_fields(**overrides: Any) -> dict[str, Any]:
    fields: dict[str, Any] = {
        "title": "Unit A",
        "description": "Two-bedroom flat close to the station.",
        "address": "742 Evergreen Terrace",
        "city": "Springfield",
        "district": "North",
        "price": Decimal("100000"),
        "bedrooms": 2,
        "bathrooms": 1,
        "area": Decimal("40"),
        "property_type": PropertyType.APARTMENT,
        "status": PropertyStatus.FOR_SALE,
    }
    fields.update(overrides)
    return fields


@pytest.fixture
def make_property() -> Callable[..., PropertyCreate]:
    """Return a builder for valid ``PropertyCreate`` objects.

    ``images`` may be given as a list of URLs; sort orders follow list order.
    """

    def _make(images: list[str] | None = None, **overrides: Any) -> PropertyCreate:
        image_models = [
            ImageCreate(url=url, alt_text=f"Photo {i + 1}", sort_order=i) for i, url in enumerate(images or [])
        ]
        return PropertyCreate(images=image_models, **_property_fields(**overrides))

    return _make


@pytest.fixture
def property_payload() -> Callable[..., dict[str, Any]]:
    """Return a builder for JSON request bodies."""

    def _payload(**overrides: Any) -> dict[str, Any]:
        body = _property_fields()
        body["price"] = 100000
        body["area"] = 40
        body["property_type"] = int(PropertyType.APARTMENT)
        body["status"] = int(PropertyStatus.FOR_SALE)
        body["images"] = [{"url": "a.png", "sort_order": 0}]
        body.update(overrides)
        return body

    return _payload
