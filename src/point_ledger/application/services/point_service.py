from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

import structlog

from point_ledger.domain.entities import MAX_BALANCE, TransactionType, replay_balance
from point_ledger.domain.exceptions import InvalidAmountError, ValidationError

if TYPE_CHECKING:
    from point_ledger.application.ports import (
        LockProvider,
        PointHistoryRepository,
        TimeProvider,
        UserPointRepository,
    )
    from point_ledger.domain.entities import PointHistory, UserPoint

logger = structlog.get_logger(__name__)


@dataclass(frozen=True, slots=True)
class ReconciliationReport:
    """Stored balance of a user compared with the balance replayed from history."""

    user_id: int
    stored_balance: int
    replayed_balance: int
    history_count: int

    @property
    def is_consistent(self) -> bool:
        return self.stored_balance == self.replayed_balance


class PointService:
    """Charges, uses and reads per-user point balances.

    Responsibilities:
    - Reject non-integer and non-positive amounts before any lock or storage access
    - Hold the per-user lock across read, validate, write and history append
    - Keep every balance within [0, max_balance]
    - Delegate reads straight to storage without locking

    charge() and use() for the same user are totally ordered by lock
    acquisition; calls for different users never wait on each other.
    """

    def __init__(
        self,
        lock_provider: LockProvider,
        time_provider: TimeProvider,
        user_point_repository: UserPointRepository,
        point_history_repository: PointHistoryRepository,
        max_balance: int = MAX_BALANCE,
    ) -> None:
        self._lock_provider = lock_provider
        self._time_provider = time_provider
        self._user_point_repo = user_point_repository
        self._history_repo = point_history_repository
        self._max_balance = max_balance

    @property
    def max_balance(self) -> int:
        return self._max_balance

    def point(self, user_id: int) -> UserPoint:
        """Current balance of the user (zero-balance record if none stored)."""
        return self._user_point_repo.get(user_id)

    def history(self, user_id: int) -> list[PointHistory]:
        """All successful charges and uses of the user, oldest first."""
        return self._history_repo.list_by_user(user_id)

    def charge(self, user_id: int, amount: int) -> UserPoint:
        """Add points to a user's balance.

        Args:
            user_id: The user to charge.
            amount: Points to add; must be positive.

        Returns:
            The UserPoint as stored after the charge.

        Raises:
            InvalidAmountError: amount is not a positive integer.
            BalanceCeilingExceededError: The new balance would exceed max_balance.
        """
        self._require_positive(amount, "charge")

        with self._lock_provider.acquire(user_id):
            try:
                current = self._user_point_repo.get(user_id)
                charged = current.charge(amount, self._max_balance)
            except ValidationError as e:
                logger.info("point.charge_rejected", user_id=user_id, amount=amount, reason=str(e))
                raise
            return self._apply(current, charged, amount, TransactionType.CHARGE)

    def use(self, user_id: int, amount: int) -> UserPoint:
        """Spend points from a user's balance.

        Args:
            user_id: The user spending points.
            amount: Points to spend; must be positive.

        Returns:
            The UserPoint as stored after the use.

        Raises:
            InvalidAmountError: amount is not a positive integer.
            InsufficientBalanceError: amount exceeds the current balance.
        """
        self._require_positive(amount, "use")

        with self._lock_provider.acquire(user_id):
            try:
                current = self._user_point_repo.get(user_id)
                used = current.use(amount)
            except ValidationError as e:
                logger.info("point.use_rejected", user_id=user_id, amount=amount, reason=str(e))
                raise
            return self._apply(current, used, amount, TransactionType.USE)

    def reconcile(self, user_id: int) -> ReconciliationReport:
        """Replay the user's history and compare it with the stored balance.

        Runs under the user's lock so the balance and history are read as
        a pair that no in-flight charge or use has half-written.
        """
        with self._lock_provider.acquire(user_id):
            stored = self._user_point_repo.get(user_id)
            histories = self._history_repo.list_by_user(user_id)

        report = ReconciliationReport(
            user_id=user_id,
            stored_balance=stored.point,
            replayed_balance=replay_balance(histories),
            history_count=len(histories),
        )
        if not report.is_consistent:
            logger.warning(
                "point.reconcile_mismatch",
                user_id=user_id,
                stored_balance=report.stored_balance,
                replayed_balance=report.replayed_balance,
            )
        return report

    def _apply(
        self,
        previous: UserPoint,
        target: UserPoint,
        amount: int,
        transaction_type: TransactionType,
    ) -> UserPoint:
        """Persist a validated balance and its history record. Caller holds the lock.

        If the history append fails, the balance read before the mutation is
        written back before the error propagates, so a balance change never
        survives without its history record.
        """
        updated = self._user_point_repo.upsert(target.user_id, target.point)
        try:
            self._history_repo.append(
                user_id=target.user_id,
                amount=amount,
                transaction_type=transaction_type,
                timestamp=self._time_provider.now(),
            )
        except Exception:
            self._user_point_repo.upsert(previous.user_id, previous.point)
            logger.error(
                "point.history_append_failed",
                user_id=target.user_id,
                amount=amount,
                restored_balance=previous.point,
            )
            raise
        event = "point.charged" if transaction_type == TransactionType.CHARGE else "point.used"
        logger.info(event, user_id=target.user_id, amount=amount, balance=updated.point)
        return updated

    @staticmethod
    def _require_positive(amount: int, operation: str) -> None:
        if not isinstance(amount, int) or isinstance(amount, bool):
            raise InvalidAmountError(
                f"{operation} amount must be an integer, got {type(amount).__name__}"
            )
        if amount <= 0:
            raise InvalidAmountError(f"{operation} amount must be positive, got {amount}")
