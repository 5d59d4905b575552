"""UserPoint entity: a user's current balance.

The record is replaced, not versioned, on every mutation. Storage owns it;
the service holds no cached copy across calls.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import TYPE_CHECKING

from point_ledger.domain.exceptions import (
    BalanceCeilingExceededError,
    InsufficientBalanceError,
)

if TYPE_CHECKING:
    from datetime import datetime

MAX_BALANCE = 2_000_000


@dataclass(frozen=True, slots=True)
class UserPoint:
    """Current point balance of a single user.

    UserPoint is immutable (frozen dataclass). charge() and use() return a
    new instance carrying the new balance; they never touch storage and
    leave updated_at alone, since the balance store stamps the write time.
    """

    user_id: int
    point: int
    updated_at: datetime

    @classmethod
    def empty(cls, user_id: int, now: datetime) -> UserPoint:
        """Zero-balance record returned for users with no stored balance."""
        return cls(user_id=user_id, point=0, updated_at=now)

    def charge(self, amount: int, max_balance: int = MAX_BALANCE) -> UserPoint:
        """Add amount to the balance.

        Args:
            amount: Positive number of points to add.
            max_balance: Ceiling the new balance must not exceed.

        Returns:
            New UserPoint with the increased balance.

        Raises:
            BalanceCeilingExceededError: If point + amount > max_balance.
        """
        new_point = self.point + amount
        if new_point > max_balance:
            raise BalanceCeilingExceededError(
                f"Charge of {amount} would raise balance of user {self.user_id} "
                f"to {new_point}, above the maximum of {max_balance}"
            )
        return replace(self, point=new_point)

    def use(self, amount: int) -> UserPoint:
        """Subtract amount from the balance.

        Raises:
            InsufficientBalanceError: If amount exceeds the current balance.
        """
        if self.point < amount:
            raise InsufficientBalanceError(
                f"Insufficient balance for user {self.user_id}: "
                f"has {self.point}, tried to use {amount}"
            )
        return replace(self, point=self.point - amount)
