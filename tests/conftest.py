"""
Pytest configuration and fixtures.
"""

from typing import AsyncGenerator

import pytest
from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine, async_sessionmaker
from sqlalchemy.pool import StaticPool

from abendlog.app.main import app
from abendlog.app.core.database import Base, get_db
from abendlog.app.core.dependencies import get_controller, get_log_loader
from abendlog.app.core.init_db import drop_all_tables

# Import all models to register them with Base.metadata
from abendlog.app.models.log_entry_orm import LogEntryORM  # noqa: F401
from abendlog.app.services.log_loader import LogLoader
from abendlog.app.services.log_store import LogStore
from abendlog.app.services.sample_data import sample_log_entries
from abendlog.app.services.view_controller import ViewController

# Use in-memory SQLite for testing
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"

engine = create_async_engine(
    TEST_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)

TestingSessionLocal = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False
)


@pytest.fixture
def store() -> LogStore:
    """Store seeded with the three sample logs (ids 1, 2, 3, newest first)."""
    return LogStore(sample_log_entries())


@pytest.fixture
def controller(store: LogStore) -> ViewController:
    return ViewController(store)


@pytest.fixture
def valid_draft() -> dict:
    return {
        "subsystem": "CI",
        "composite": "PROD",
        "program": "ORDENTRY",
        "abendCode": "S0C7",
        "jobname": "ORDJOB01",
        "logNumber": "0042",
        "category": "Program",
        "description": "Data exception in order entry",
        "problem": "Packed decimal field held spaces.",
        "createdBy": "Ana Lee",
    }


@pytest.fixture
def db_engine():
    """The in-memory engine behind db_session."""
    return engine


@pytest.fixture(scope="function")
async def db_session() -> AsyncGenerator[AsyncSession, None]:
    """
    Creates a fresh database session for a test.
    Tables are dropped after the test completes.
    """
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    async with TestingSessionLocal() as session:
        yield session

    await drop_all_tables(engine)


@pytest.fixture(scope="function")
async def client(db_session: AsyncSession, controller: ViewController) -> AsyncGenerator[AsyncClient, None]:
    """
    Test client with the database, the controller and the log loader overridden.
    The loader reads GET /logs from this same app.
    """
    async def override_get_db():
        try:
            yield db_session
        finally:
            pass

    def override_get_controller():
        return controller

    def override_get_log_loader():
        return LogLoader("http://test", transport=ASGITransport(app=app))

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_controller] = override_get_controller
    app.dependency_overrides[get_log_loader] = override_get_log_loader

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as c:
        yield c

    app.dependency_overrides.clear()
