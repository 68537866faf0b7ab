"""Pytest configuration and fixtures for projection service tests."""

import os

# Per-client rate limits would throttle the suite; disable before settings load
os.environ.setdefault("RATE_LIMIT_ENABLED", "false")

from collections.abc import AsyncGenerator  # noqa: E402
from typing import Any  # noqa: E402

import pytest  # noqa: E402
import pytest_asyncio  # noqa: E402
from fakeredis import aioredis as fakeredis  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy import event  # noqa: E402
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from adprojection.db.base import Base  # noqa: E402
from adprojection.db.redis import get_redis  # noqa: E402
from adprojection.db.session import get_db  # noqa: E402
from adprojection.main import app  # noqa: E402
from adprojection.models import (  # noqa: E402
    AdFinancialAssumptions,
    AdFinancialScenario,
)

# Test database URL (using in-memory SQLite for tests)
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


@pytest_asyncio.fixture(scope="function")
async def test_engine() -> AsyncGenerator[Any, None]:
    """Create test database engine with all tables."""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        echo=False,
        poolclass=StaticPool,
    )

    # Enable foreign keys for SQLite
    @event.listens_for(engine.sync_engine, "connect")
    def set_sqlite_pragma(dbapi_connection: Any, _connection_record: Any) -> None:
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    await engine.dispose()


@pytest_asyncio.fixture(scope="function")
async def test_session(test_engine: Any) -> AsyncGenerator[AsyncSession, None]:
    """Create test database session."""
    async_session = async_sessionmaker(
        test_engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autocommit=False,
        autoflush=False,
    )

    async with async_session() as session:
        yield session
        await session.rollback()


@pytest_asyncio.fixture(scope="function")
async def test_redis() -> AsyncGenerator[Any, None]:
    """Create fake Redis client for testing."""
    redis_client = fakeredis.FakeRedis(decode_responses=True)
    yield redis_client
    await redis_client.flushall()
    await redis_client.aclose()


@pytest_asyncio.fixture(scope="function")
async def test_client(
    test_session: AsyncSession,
    test_redis: Any,
) -> AsyncGenerator[AsyncClient, None]:
    """Create test HTTP client with dependency overrides."""

    async def override_get_db() -> AsyncGenerator[AsyncSession, None]:
        yield test_session

    async def override_get_redis() -> Any:
        return test_redis

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_redis] = override_get_redis

    transport = ASGITransport(app=app)  # type: ignore[arg-type]
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client

    app.dependency_overrides.clear()


@pytest.fixture
def base_assumptions() -> dict[str, Any]:
    """Reference assumption set: 1000 creators, 50 campaigns, unconstrained in month 1."""
    return {
        "starting_creators": 1000,
        "monthly_creator_growth": 0.05,
        "percent_creators_monetized": 0.2,
        "episodes_per_creator_per_month": 4,
        "listens_per_episode": 500,
        "ad_slots_per_listen": 2,
        "fill_rate": 0.8,
        "share_preroll": 0.5,
        "share_midroll": 0.3,
        "share_postroll": 0.2,
        "cpm_preroll": 15,
        "cpm_midroll": 12,
        "cpm_postroll": 8,
        "starting_campaigns": 50,
        "monthly_campaign_growth": 0.03,
        "avg_campaign_monthly_budget": 2000,
        "creator_rev_share": 0.6,
        "platform_variable_cost_pct": 0.1,
    }


@pytest_asyncio.fixture
async def create_test_scenario(test_session: AsyncSession) -> Any:
    """Factory fixture to create scenarios, with assumptions when given."""

    async def _create_scenario(
        assumptions: dict[str, Any] | None = None, **kwargs: Any
    ) -> AdFinancialScenario:
        scenario_data = {"name": "Base Case", "description": "Reference plan", "is_default": True}
        scenario_data.update(kwargs)
        scenario = AdFinancialScenario(**scenario_data)
        test_session.add(scenario)
        await test_session.flush()

        if assumptions is not None:
            test_session.add(AdFinancialAssumptions(scenario_id=scenario.id, **assumptions))

        await test_session.commit()
        await test_session.refresh(scenario)
        return scenario

    return _create_scenario
