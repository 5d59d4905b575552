from __future__ import annotations

import copy
import itertools
import time
from threading import Lock
from typing import TYPE_CHECKING

from point_ledger.application.ports import PointHistoryRepository
from point_ledger.domain.entities import PointHistory

if TYPE_CHECKING:
    from datetime import datetime

    from point_ledger.domain.entities import TransactionType


class InMemoryPointHistoryRepository(PointHistoryRepository):
    """In-memory append-only history store.

    Implementation notes:
    - Ids start at 1 and increase by one per append, across all users
    - Id assignment and insert happen under one lock, so ids follow
      insertion order
    - list_by_user() returns deep copies in insertion order
    """

    def __init__(self, latency: float = 0.0) -> None:
        self._latency = latency
        self._histories: list[PointHistory] = []
        self._ids = itertools.count(1)
        self._lock = Lock()

    def append(
        self,
        user_id: int,
        amount: int,
        transaction_type: TransactionType,
        timestamp: datetime,
    ) -> PointHistory:
        self._simulate_latency()
        with self._lock:
            history = PointHistory(
                id=next(self._ids),
                user_id=user_id,
                amount=amount,
                transaction_type=transaction_type,
                timestamp=timestamp,
            )
            self._histories.append(history)
        return copy.deepcopy(history)

    def list_by_user(self, user_id: int) -> list[PointHistory]:
        self._simulate_latency()
        with self._lock:
            histories = [h for h in self._histories if h.user_id == user_id]
        return copy.deepcopy(histories)

    def _simulate_latency(self) -> None:
        if self._latency > 0:
            time.sleep(self._latency)
