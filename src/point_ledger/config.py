from functools import lru_cache

import structlog
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from point_ledger.application.services import PointService
from point_ledger.domain.entities import MAX_BALANCE
from point_ledger.infrastructure import (
    InMemoryLockProvider,
    InMemoryPointHistoryRepository,
    InMemoryUserPointRepository,
    SystemTimeProvider,
)
from point_ledger.infrastructure.logging import configure_logging


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="POINT_LEDGER_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Ledger
    max_balance: int = Field(default=MAX_BALANCE, gt=0)

    # Logging
    debug: bool = False
    log_json: bool = True


@lru_cache
def get_settings() -> Settings:
    return Settings()


def build_point_service(settings: Settings | None = None) -> PointService:
    """Wire a PointService with in-memory adapters and configured logging.

    Each call returns a service with its own lock registry and stores.
    """
    settings = settings or get_settings()
    configure_logging(debug=settings.debug, json=settings.log_json)

    time_provider = SystemTimeProvider()
    service = PointService(
        lock_provider=InMemoryLockProvider(),
        time_provider=time_provider,
        user_point_repository=InMemoryUserPointRepository(time_provider),
        point_history_repository=InMemoryPointHistoryRepository(),
        max_balance=settings.max_balance,
    )
    structlog.get_logger(__name__).info("point_service.built", max_balance=settings.max_balance)
    return service
