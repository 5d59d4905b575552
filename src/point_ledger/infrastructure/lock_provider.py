from __future__ import annotations

from contextlib import contextmanager
from threading import Lock
from typing import TYPE_CHECKING

from point_ledger.application.ports import LockProvider

if TYPE_CHECKING:
    from collections.abc import Iterator


class InMemoryLockProvider(LockProvider):
    """Registry of per-user locks for a single process.

    Implementation uses two-phase locking:
    1. Registry lock protects the lock dictionary during get-or-create
    2. User lock serializes charge/use for that user

    This pattern ensures:
    - One lock instance per user, even when the first calls race
    - Minimal contention (registry lock held only for the dictionary step)
    - Per-user parallelism (different users lock independently)

    Limitations:
    - Single-process only (locks don't work across processes)
    - Unbounded memory growth (one lock per distinct user, never evicted)
    """

    def __init__(self) -> None:
        self._locks: dict[int, Lock] = {}
        self._registry_lock = Lock()

    def __len__(self) -> int:
        return len(self._locks)

    def lock_for(self, user_id: int) -> Lock:
        """Return the lock for user_id, creating it on first access."""
        with self._registry_lock:
            return self._locks.setdefault(user_id, Lock())

    @contextmanager
    def acquire(self, user_id: int) -> Iterator[None]:
        lock = self.lock_for(user_id)
        # Registry lock is already released - other users can proceed
        with lock:
            yield


class NoOpLockProvider(LockProvider):
    """Lock provider that performs no locking.

    Use this for unit tests where:
    - Concurrency is not being tested
    - Tests are single-threaded

    Do NOT use for any test verifying concurrent charge/use behavior.
    """

    @contextmanager
    def acquire(self, user_id: int) -> Iterator[None]:  # noqa: ARG002
        yield
