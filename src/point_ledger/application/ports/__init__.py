"""Ports - Abstract interfaces for external dependencies.

Ports define the contracts that infrastructure adapters must implement.
This allows the application layer to remain decoupled from concrete implementations.
"""

from point_ledger.application.ports.lock_provider import LockProvider
from point_ledger.application.ports.point_history_repository import PointHistoryRepository
from point_ledger.application.ports.time_provider import TimeProvider
from point_ledger.application.ports.user_point_repository import UserPointRepository

__all__ = [
    "LockProvider",
    "PointHistoryRepository",
    "TimeProvider",
    "UserPointRepository",
]
