"""Shared pytest fixtures.

Every test gets a fresh in-memory SQLite database, a fresh fakeredis server
and a controllable clock, so tests are isolated and need no containers.
"""

from datetime import UTC, datetime, timedelta

import fakeredis
import pytest
import pytest_asyncio
from fakeredis.aioredis import FakeRedis

from warden.core.config import Settings
from warden.core.container import build_container
from warden.core.enums import Environment
from warden.infrastructure.logging.console_adapter import ConsoleAdapter

TEST_SECRET_KEY = "test-secret-key-that-is-at-least-32-characters"
START_TIME = datetime(2026, 1, 15, 12, 0, tzinfo=UTC)


class MutableClock:
    """Clock whose "now" only moves when a test moves it."""

    def __init__(self, now: datetime = START_TIME) -> None:
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **delta: float) -> datetime:
        self.now += timedelta(**delta)
        return self.now


@pytest.fixture
def clock() -> MutableClock:
    return MutableClock()


@pytest.fixture
def settings() -> Settings:
    """Settings for the test environment (no .env file)."""
    return Settings(
        _env_file=None,  # type: ignore[call-arg]
        environment=Environment.TESTING,
        database_url="sqlite+aiosqlite:///:memory:",
        redis_url="redis://localhost:6379/15",
        secret_key=TEST_SECRET_KEY,
        bcrypt_rounds=10,
        log_level="WARNING",
    )


@pytest.fixture
def logger() -> ConsoleAdapter:
    return ConsoleAdapter(use_json=True, level="WARNING")


@pytest.fixture
def fake_redis() -> FakeRedis:
    """fakeredis client on a private server (no state shared across tests)."""
    return FakeRedis(server=fakeredis.FakeServer())


@pytest_asyncio.fixture
async def container(settings, fake_redis, logger, clock):
    """Fully wired container on a freshly created schema."""
    container = build_container(
        settings, redis_client=fake_redis, logger=logger, clock=clock
    )
    await container.database.create_all()
    yield container
    await container.close()


@pytest.fixture
def database(container):
    return container.database


# Pytest markers for different test types
def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests with fakes")
    config.addinivalue_line(
        "markers", "integration: Integration tests with real database"
    )
