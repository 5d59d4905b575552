from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable
    from datetime import datetime


class TransactionType(Enum):
    """Kinds of balance mutation recorded in the history."""

    CHARGE = "CHARGE"
    USE = "USE"


@dataclass(frozen=True, slots=True)
class PointHistory:
    """Immutable audit record of one successful charge or use.

    The id is assigned by the history store on insert. amount is always the
    positive magnitude of the mutation, never the resulting balance.
    """

    id: int
    user_id: int
    amount: int
    transaction_type: TransactionType
    timestamp: datetime

    @property
    def signed_amount(self) -> int:
        """Balance delta of this record: +amount for CHARGE, -amount for USE."""
        if self.transaction_type == TransactionType.USE:
            return -self.amount
        return self.amount


def replay_balance(histories: Iterable[PointHistory]) -> int:
    """Rebuild a balance by summing signed amounts from zero, in order."""
    return sum(history.signed_amount for history in histories)
