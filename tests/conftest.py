"""
Shared fixtures: in-memory SQLite for the API tests and a small SEO team
snapshot for the engine tests.
"""

import os

import pytest
import pytest_asyncio

# must be set before kpitracker.config is imported
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["LOG_LEVEL"] = "WARNING"

from kpitracker.schemas.kpi import KPIDefinition
from kpitracker.schemas.member import TeamMember
from kpitracker.schemas.performance import PerformanceRecord, PeriodWindow
from kpitracker.schemas.snapshot import Snapshot
from kpitracker.schemas.target import DesignationTarget, UserTarget


# ── Engine fixtures ──

@pytest.fixture
def kpis():
    return [
        KPIDefinition(id=1, key="outreaches", display_label="Monthly Outreaches"),
        KPIDefinition(id=2, key="live_links", display_label="Live Links"),
        KPIDefinition(id=3, key="monthly_report", display_label="Monthly Report", value_kind="delivered"),
        KPIDefinition(id=4, key="legacy_posts", display_label="Legacy Posts", is_active=False),
    ]


@pytest.fixture
def members():
    return [
        TeamMember(id=1, name="Alice", designation="SEO Analyst"),
        TeamMember(id=2, name="Bob", designation="SEO Analyst"),
        TeamMember(id=3, name="Carol", designation="Content Writer", status="inactive"),
    ]


@pytest.fixture
def make_record():
    def _make(member_id, month, year, **values):
        return PerformanceRecord(member_id=member_id, month=month, year=year, values=values)
    return _make


@pytest.fixture
def make_snapshot(members, kpis):
    def _make(designation_targets=(), user_targets=(), records=()):
        return Snapshot(
            members=members,
            kpis=kpis,
            designation_targets=list(designation_targets),
            user_targets=list(user_targets),
            records=list(records),
        )
    return _make


@pytest.fixture
def analyst_targets():
    return [
        DesignationTarget(designation="SEO Analyst", kpi_key="outreaches", monthly_target=100, annual_target=0),
        DesignationTarget(designation="SEO Analyst", kpi_key="live_links", monthly_target=10, annual_target=0),
    ]


@pytest.fixture
def q3_window():
    return PeriodWindow(start_month=7, start_year=2025, end_month=9, end_year=2025)


@pytest.fixture
def cycle_window():
    # 13-month operating cycle
    return PeriodWindow(start_month=8, start_year=2025, end_month=8, end_year=2026)


@pytest.fixture
def user_override():
    return UserTarget(member_id=1, kpi_key="outreaches", monthly_target=525, annual_target=6825)


# ── Database fixtures ──

@pytest_asyncio.fixture
async def db_engine():
    """In-memory SQLite async engine for testing."""
    from sqlalchemy.ext.asyncio import create_async_engine
    from sqlalchemy.pool import StaticPool

    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        echo=False,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    from kpitracker.database import Base
    from kpitracker.models import member, kpi, target, performance  # noqa: F401
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest_asyncio.fixture
async def session_maker(db_engine):
    from sqlalchemy.ext.asyncio import async_sessionmaker, AsyncSession
    return async_sessionmaker(db_engine, class_=AsyncSession, expire_on_commit=False)


@pytest_asyncio.fixture
async def db_session(session_maker):
    async with session_maker() as session:
        yield session


@pytest_asyncio.fixture
async def client(session_maker):
    """Async HTTP client against the app, wired to the test database."""
    from httpx import AsyncClient, ASGITransport
    from kpitracker.database import get_db
    from kpitracker.main import app

    async def override_get_db():
        async with session_maker() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()
