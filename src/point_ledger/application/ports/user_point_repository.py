from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from point_ledger.domain.entities import UserPoint


class UserPointRepository(ABC):
    """Port for the balance store.

    Contract:
    - get() never returns None: unknown users get a zero-balance record
    - upsert() always succeeds and returns the authoritative stored record
    - upsert() stamps updated_at with the write time
    - Implementations MUST tolerate concurrent calls for different users;
      same-user read-modify-write sequences are serialized by LockProvider
    """

    @abstractmethod
    def get(self, user_id: int) -> UserPoint:
        """Retrieve the current balance of a user.

        Args:
            user_id: The user identifier.

        Returns:
            The stored UserPoint, or a zero-balance UserPoint if absent.
            Returned entity is a copy; mutations do not affect stored state.
        """

    @abstractmethod
    def upsert(self, user_id: int, point: int) -> UserPoint:
        """Store a new balance for the user (creates or replaces).

        Args:
            user_id: The user identifier.
            point: The new balance.

        Returns:
            The record as stored, with updated_at set to the write time.
        """
