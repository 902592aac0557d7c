import copy
from collections.abc import AsyncGenerator

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy import JSON, event
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from fieldaudit.core.audit_engine.schemas import AuditEngineConfig
from fieldaudit.db.base import Base
from fieldaudit.db.models import *  # noqa: F401,F403 - ensure all models loaded

# In-memory SQLite for testing - remap JSONB to JSON
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


# Make JSONB render as JSON for SQLite
@event.listens_for(Base.metadata, "before_create")
def _remap_jsonb(target, connection, **kw):
    if connection.dialect.name == "sqlite":
        for table in target.tables.values():
            for column in table.columns:
                if isinstance(column.type, JSONB):
                    column.type = JSON()


@pytest.fixture
async def test_engine():
    engine = create_async_engine(
        TEST_DATABASE_URL,
        echo=False,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
async def db_session(test_engine) -> AsyncGenerator[AsyncSession, None]:
    session_factory = async_sessionmaker(
        test_engine, class_=AsyncSession, expire_on_commit=False
    )
    async with session_factory() as session:
        yield session
        await session.rollback()


@pytest.fixture
async def client(db_session):
    from fieldaudit.api.deps import get_db
    from fieldaudit.main import app

    async def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


@pytest.fixture
def engine_config():
    return AuditEngineConfig()


SOLAR_RECORD = {
    "id": "AUD-001",
    "services": ["solar", "cctv"],
    "engineer": "Eng. Bello",
    "client": {
        "id": "client-17",
        "leadId": "lead-9",
        "clientName": "Ada Obi",
        "engineerName": "Current User",
        "photos": ["front.jpg"],
        "gps": {"lat": 6.45, "lng": 3.39},
    },
    "site": {
        "roofMaterial": "Aluminium",
        "dbType": "Old",
        "photos": ["roof-1.jpg", "roof-2.jpg"],
        "hazardsList": ["Exposed wiring"],
        "cameras": [{"qty": 2}],
    },
    "load": {
        "items": [
            {"name": "Fridge", "power": 150, "qty": 1, "hours": 24},
            {"name": "TV", "power": 120, "qty": 2, "hours": 6},
            {"name": "Pump", "power": 750, "qty": 1, "hours": 2},
        ],
        "stats": {
            "totalLoad": 4.5,
            "totalDailyEnergy": 18.5,
            "criticalLoad": 1.5,
            "peakSimultaneousLoad": 3.6,
            "surgePower": 6.0,
        },
    },
    "infra": {"earthingValue": 1.2, "hasEarthing": True},
    "design": {
        "dbType": "New",
        "recommendedInverter": 5,
        "batteryCapacity": 10,
        "solarArraySize": 6,
        "backupHours": 8,
        "independenceLevel": 70,
        "monthlySavings": 85000,
        "paybackYears": 3.5,
        "totalSystemCostEstimate": 4500000,
        "batteryType": "Lithium",
        "targetCoverage": 80,
        "warnings": [{"component": "Battery", "message": "Autonomy below target"}],
    },
}

CCTV_RECORD = {
    "services": ["cctv"],
    "client": {"clientName": "Kano Warehouse Ltd."},
    "site": {"cameras": [{"qty": 4}, {"qty": 2}, {"qty": 1}]},
    "load": {
        "cameras": [{"qty": 1}, {"qty": 1}, {"qty": 1}, {"qty": 1}, {"qty": 1}],
        "stats": {"totalLoad": 7},
    },
}


@pytest.fixture
def solar_record():
    return copy.deepcopy(SOLAR_RECORD)


@pytest.fixture
def cctv_record():
    return copy.deepcopy(CCTV_RECORD)
