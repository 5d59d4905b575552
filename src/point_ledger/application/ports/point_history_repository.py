from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from datetime import datetime

    from point_ledger.domain.entities import PointHistory, TransactionType


class PointHistoryRepository(ABC):
    """Port for the append-only history store.

    Contract:
    - Only successful mutations are appended (existence implies success)
    - Records are never updated or deleted
    - append() assigns the record id
    - list_by_user() returns records in insertion order
    - Implementations MUST tolerate concurrent calls
    """

    @abstractmethod
    def append(
        self,
        user_id: int,
        amount: int,
        transaction_type: TransactionType,
        timestamp: datetime,
    ) -> PointHistory:
        """Append a history record.

        Args:
            user_id: The user whose balance changed.
            amount: Magnitude of the charge or use (positive).
            transaction_type: CHARGE or USE.
            timestamp: When the mutation was applied (UTC).

        Returns:
            The stored PointHistory with its assigned id.
        """

    @abstractmethod
    def list_by_user(self, user_id: int) -> list[PointHistory]:
        """Return all records of a user in insertion order (empty if none)."""
