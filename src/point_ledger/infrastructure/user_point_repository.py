from __future__ import annotations

import copy
import time
from threading import Lock
from typing import TYPE_CHECKING

from point_ledger.application.ports import UserPointRepository
from point_ledger.domain.entities import UserPoint

if TYPE_CHECKING:
    from point_ledger.application.ports import TimeProvider


class InMemoryUserPointRepository(UserPointRepository):
    """In-memory balance store keyed by user id.

    Implementation notes:
    - get() for an unknown user returns a zero-balance record without storing it
    - upsert() stamps updated_at from the injected TimeProvider
    - Returns deep copies to mimic database detachment
    - Each call is atomic on its own; it does NOT serialize a
      read-then-write sequence, that is the LockProvider's job

    latency (seconds) is slept before every call. Concurrency tests use it to
    widen the gap between a read and the following write, which makes a
    missing per-user lock show up as lost updates.
    """

    def __init__(self, time_provider: TimeProvider, latency: float = 0.0) -> None:
        self._time_provider = time_provider
        self._latency = latency
        self._points: dict[int, UserPoint] = {}
        self._lock = Lock()

    def get(self, user_id: int) -> UserPoint:
        self._simulate_latency()
        with self._lock:
            user_point = self._points.get(user_id)
        if user_point is None:
            return UserPoint.empty(user_id, self._time_provider.now())
        return copy.deepcopy(user_point)

    def upsert(self, user_id: int, point: int) -> UserPoint:
        self._simulate_latency()
        user_point = UserPoint(user_id=user_id, point=point, updated_at=self._time_provider.now())
        with self._lock:
            self._points[user_id] = user_point
        return copy.deepcopy(user_point)

    def _simulate_latency(self) -> None:
        if self._latency > 0:
            time.sleep(self._latency)
