import os

# app.core.config validates the environment at import time
os.environ["APP_ENV"] = "development"
os.environ["DB_TYPE"] = "sqlite"
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///./test_locations.db")

import pytest
from httpx import AsyncClient, ASGITransport
from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine
from sqlalchemy.orm import sessionmaker

from app.core.db import Base, get_db, enable_sqlite_foreign_keys
from app.schemas.inventory.warehouse_schemas import WarehouseCreate
from app.schemas.inventory.location_schemas import ZoneCreate, AisleCreate
from app.services.inventory.warehouse_service import create_warehouse
from app.services.inventory.location_builder_service import create_zone, create_aisle


@pytest.fixture
async def engine(tmp_path):
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'locations.db'}")
    event.listen(engine.sync_engine, "connect", enable_sqlite_foreign_keys)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(
        bind=engine,
        class_=AsyncSession,
        autoflush=False,
        expire_on_commit=False,
    )


@pytest.fixture
async def db(session_factory):
    async with session_factory() as session:
        yield session


@pytest.fixture
async def warehouse(db):
    return await create_warehouse(db, WarehouseCreate(code="WH1", name="Main warehouse"))


@pytest.fixture
async def other_warehouse(db):
    return await create_warehouse(db, WarehouseCreate(code="WH2", name="Overflow warehouse"))


@pytest.fixture
async def zone_a(db, warehouse):
    return await create_zone(db, warehouse.id, ZoneCreate(zone="A"))


@pytest.fixture
async def aisle_a1(db, zone_a):
    """Aisle A1 in zone A with three pre-populated levels."""
    return await create_aisle(db, AisleCreate(parent_id=zone_a.id, aisle="A1", levels=3))


@pytest.fixture
async def client(session_factory):
    from main import app

    async def override_get_db():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()
