"""Service test fixtures — async DB + FastAPI test client.

Invariants:
    - Every test gets a fresh in-memory SQLite database (tables from Base.metadata)
    - db_manager patched to a manager on the test engine, so get_db and the
      readiness probe run the real session path (rollback + error mapping)
    - make_donor inserts donors directly, bypassing the registry service

Design Decisions:
    - SQLite in-memory with StaticPool: every session shares the one connection
    - Unique constraints on name_key are real SQLite constraints, so conflict
      paths run against them
"""

import pytest
from sqlalchemy.ext.asyncio import (
    AsyncSession, create_async_engine, async_sessionmaker,
)
from sqlalchemy.pool import StaticPool
from httpx import ASGITransport, AsyncClient

from donor_registry.db.base import Base
from donor_registry.infrastructure.database import DatabaseSessionManager
from donor_registry.models.donor import Donor
import donor_registry.infrastructure.database as db_module
from donor_registry.main import app


@pytest.fixture
async def test_engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:", echo=False, poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
async def test_session_factory(test_engine):
    return async_sessionmaker(
        test_engine, class_=AsyncSession, expire_on_commit=False,
    )


@pytest.fixture
async def test_db(test_session_factory):
    async with test_session_factory() as session:
        yield session


@pytest.fixture
def test_manager(test_engine, test_session_factory):
    """Session manager bound to the test engine, skipping engine construction."""
    manager = DatabaseSessionManager.__new__(DatabaseSessionManager)
    manager.engine = test_engine
    manager._session_factory = test_session_factory
    return manager


@pytest.fixture
async def client(test_manager):
    """FastAPI test client; get_db and the readiness probe both use the test manager."""
    original_manager = db_module.db_manager
    db_module.db_manager = test_manager

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    db_module.db_manager = original_manager


@pytest.fixture
def make_donor(test_db):
    """Insert a donor row directly. Unspecified fields get plausible defaults."""
    async def _make(name: str = "Donor", **fields) -> Donor:
        values = {
            "contact_number": "9000000000",
            "blood_group": "O+",
            "district": "Chennai",
            "taluk": "Egmore",
        }
        values.update(fields)
        donor = Donor(name=name, **values)
        test_db.add(donor)
        await test_db.commit()
        await test_db.refresh(donor)
        return donor

    return _make
