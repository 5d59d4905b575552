from __future__ import annotations

from abc import ABC, abstractmethod
from contextlib import contextmanager
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterator


class LockProvider(ABC):
    """Port for per-user locking.

    Contract:
    - acquire() MUST serialize access for the same user_id
    - acquire() MUST release the lock when the context exits (normal or exception)
    - acquire() MUST be blocking (waits until lock is available, no timeout)
    - Different user_ids MAY be acquired concurrently

    The context manager pattern ensures locks are always released,
    even when exceptions occur within the critical section.
    """

    @abstractmethod
    @contextmanager
    def acquire(self, user_id: int) -> Iterator[None]:
        """Acquire the lock for the given user.

        Args:
            user_id: Stable user identifier the lock is scoped to.

        Yields:
            None. The lock is held for the duration of the context.

        Usage:
            with lock_provider.acquire(42):
                # Critical section - lock is held
                ...
            # Lock is released here
        """
        ...
