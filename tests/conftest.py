"""Shared pytest fixtures for the test suite."""

from datetime import UTC, datetime

import pytest
import structlog

from point_ledger.infrastructure.lock_provider import InMemoryLockProvider
from point_ledger.infrastructure.point_history_repository import InMemoryPointHistoryRepository
from point_ledger.infrastructure.time_provider import FixedTimeProvider
from point_ledger.infrastructure.user_point_repository import InMemoryUserPointRepository


@pytest.fixture(autouse=True)
def reset_structlog():
    """Undo any configure_logging() call made by a test."""
    yield
    structlog.reset_defaults()


@pytest.fixture
def fixed_time() -> datetime:
    """A fixed timestamp for deterministic testing."""
    return datetime(2024, 1, 15, 12, 0, 0, tzinfo=UTC)


@pytest.fixture
def time_provider(fixed_time: datetime) -> FixedTimeProvider:
    """A time provider with a fixed timestamp."""
    return FixedTimeProvider(fixed_time)


@pytest.fixture
def lock_provider() -> InMemoryLockProvider:
    """A fresh lock registry per test."""
    return InMemoryLockProvider()


@pytest.fixture
def user_point_repository(time_provider: FixedTimeProvider) -> InMemoryUserPointRepository:
    return InMemoryUserPointRepository(time_provider)


@pytest.fixture
def point_history_repository() -> InMemoryPointHistoryRepository:
    return InMemoryPointHistoryRepository()
