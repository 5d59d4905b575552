"""Infrastructure layer - Concrete implementations of ports.

This layer contains:
- Locking: Per-user lock registry for a single process
- Persistence: In-memory balance and history stores
- Time Provider: Clock abstraction for testability
- Logging: structlog configuration

Infrastructure adapters implement the ports defined in the application layer.
"""

from point_ledger.infrastructure.lock_provider import InMemoryLockProvider, NoOpLockProvider
from point_ledger.infrastructure.point_history_repository import InMemoryPointHistoryRepository
from point_ledger.infrastructure.time_provider import FixedTimeProvider, SystemTimeProvider
from point_ledger.infrastructure.user_point_repository import InMemoryUserPointRepository

__all__ = [
    "FixedTimeProvider",
    "InMemoryLockProvider",
    "InMemoryPointHistoryRepository",
    "InMemoryUserPointRepository",
    "NoOpLockProvider",
    "SystemTimeProvider",
]
