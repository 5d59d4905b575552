"""Concurrency tests for PointService with a real lock registry.

Which caller wins a race is nondeterministic; these tests assert aggregate
outcomes only: success counts, final balances, history lengths and bounds.
"""

import threading
from collections.abc import Callable
from concurrent.futures import ThreadPoolExecutor, wait

import pytest

from point_ledger.application.services import PointService
from point_ledger.domain.entities import MAX_BALANCE, replay_balance
from point_ledger.domain.exceptions import (
    BalanceCeilingExceededError,
    InsufficientBalanceError,
    ValidationError,
)
from point_ledger.infrastructure.lock_provider import InMemoryLockProvider
from point_ledger.infrastructure.point_history_repository import InMemoryPointHistoryRepository
from point_ledger.infrastructure.time_provider import SystemTimeProvider
from point_ledger.infrastructure.user_point_repository import InMemoryUserPointRepository

STORAGE_LATENCY = 0.001


# =============================================================================
# Fixtures & helpers
# =============================================================================


@pytest.fixture
def service() -> PointService:
    time_provider = SystemTimeProvider()
    return PointService(
        lock_provider=InMemoryLockProvider(),
        time_provider=time_provider,
        user_point_repository=InMemoryUserPointRepository(time_provider, latency=STORAGE_LATENCY),
        point_history_repository=InMemoryPointHistoryRepository(latency=STORAGE_LATENCY),
    )


def run_concurrently(thread_count: int, task: Callable[[], object]) -> list[str]:
    """Start thread_count calls of task together; return "success" or the error name per call."""
    barrier = threading.Barrier(thread_count)
    results: list[str] = []
    results_lock = threading.Lock()

    def worker() -> None:
        barrier.wait()
        try:
            task()
            outcome = "success"
        except ValidationError as e:
            outcome = type(e).__name__
        with results_lock:
            results.append(outcome)

    with ThreadPoolExecutor(max_workers=thread_count) as executor:
        futures = [executor.submit(worker) for _ in range(thread_count)]
        wait(futures, timeout=30)
        for future in futures:
            future.result()

    assert len(results) == thread_count
    return results


# =============================================================================
# Same-user Tests
# =============================================================================


class TestConcurrentCharge:
    def test_concurrent_charges_all_apply(self, service: PointService) -> None:
        results = run_concurrently(10, lambda: service.charge(1, 1_000))

        assert results.count("success") == 10
        assert service.point(1).point == 10_000
        assert len(service.history(1)) == 10

    def test_concurrent_charges_stop_at_ceiling(self, service: PointService) -> None:
        amount = 300_000
        results = run_concurrently(10, lambda: service.charge(1, amount))

        expected_successes = MAX_BALANCE // amount
        assert results.count("success") == expected_successes
        assert results.count(BalanceCeilingExceededError.__name__) == 10 - expected_successes
        assert service.point(1).point == expected_successes * amount
        assert len(service.history(1)) == expected_successes

    def test_two_large_charges_only_one_fits(self, service: PointService) -> None:
        results = run_concurrently(2, lambda: service.charge(9, 1_500_000))

        assert sorted(results) == sorted(["success", BalanceCeilingExceededError.__name__])
        assert service.point(9).point == 1_500_000
        assert len(service.history(9)) == 1


class TestConcurrentUse:
    def test_concurrent_uses_all_apply(self, service: PointService) -> None:
        service.charge(1, 10_000)

        results = run_concurrently(10, lambda: service.use(1, 1_000))

        assert results.count("success") == 10
        assert service.point(1).point == 0
        assert len(service.history(1)) == 11

    def test_concurrent_uses_stop_at_zero(self, service: PointService) -> None:
        balance, amount = 5_500, 1_000
        service.charge(1, balance)

        results = run_concurrently(10, lambda: service.use(1, amount))

        expected_successes = balance // amount
        assert results.count("success") == expected_successes
        assert results.count(InsufficientBalanceError.__name__) == 10 - expected_successes
        assert service.point(1).point == balance - expected_successes * amount
        assert len(service.history(1)) == expected_successes + 1


class TestConcurrentMixed:
    def test_mixed_charges_and_uses_keep_ledger_consistent(self, service: PointService) -> None:
        service.charge(1, 5_000)
        counter = iter(range(40))
        counter_lock = threading.Lock()

        def task() -> None:
            with counter_lock:
                n = next(counter)
            if n % 2 == 0:
                service.charge(1, 700)
            else:
                service.use(1, 1_100)

        results = run_concurrently(40, task)

        balance = service.point(1).point
        histories = service.history(1)
        assert 0 <= balance <= MAX_BALANCE
        assert len(histories) == results.count("success") + 1
        assert replay_balance(histories) == balance
        assert service.reconcile(1).is_consistent is True


# =============================================================================
# Cross-user Tests
# =============================================================================


class TestConcurrentUsers:
    def test_users_do_not_interfere(self, service: PointService) -> None:
        user_ids = list(range(1, 6))
        calls = iter([user_id for user_id in user_ids for _ in range(8)])
        calls_lock = threading.Lock()

        def task() -> None:
            with calls_lock:
                user_id = next(calls)
            service.charge(user_id, 100)

        results = run_concurrently(40, task)

        assert results.count("success") == 40
        for user_id in user_ids:
            assert service.point(user_id).point == 800
            assert len(service.history(user_id)) == 8
