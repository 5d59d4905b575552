"""Domain entities - Balance records and their audit trail."""

from point_ledger.domain.entities.point_history import (
    PointHistory,
    TransactionType,
    replay_balance,
)
from point_ledger.domain.entities.user_point import MAX_BALANCE, UserPoint

__all__ = [
    "MAX_BALANCE",
    "PointHistory",
    "TransactionType",
    "UserPoint",
    "replay_balance",
]
