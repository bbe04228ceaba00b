from __future__ import annotations

import threading
from concurrent.futures import ThreadPoolExecutor

from src.wage_tracker.wage_tracker.core.exceptions import ConflictError
from src.wage_tracker.wage_tracker.sessions.locks import UserLockRegistry


def _race(n, fn):
    barrier = threading.Barrier(n)

    def run(_):
        barrier.wait()
        try:
            return fn()
        except ConflictError:
            return None

    with ThreadPoolExecutor(max_workers=n) as pool:
        return list(pool.map(run, range(n)))


def test_concurrent_starts_open_exactly_one_session(tracker):
    tracker.set_wage("alice", 1000)

    results = _race(16, lambda: tracker.start_session("alice"))

    assert len([r for r in results if r is not None]) == 1
    assert len([s for s in tracker.list_sessions("alice") if s.end_time is None]) == 1


def test_concurrent_stops_close_once(tracker, clock):
    tracker.set_wage("alice", 1000)
    session = tracker.start_session("alice")
    clock.advance(hours=1)

    results = _race(16, lambda: tracker.stop_session("alice", session.session_id))

    winners = [r for r in results if r is not None]
    assert len(winners) == 1
    assert winners[0].earned_amount == 1000


def test_lock_registry_returns_same_lock_per_user():
    locks = UserLockRegistry()

    assert locks.for_user("alice") is locks.for_user("alice")
    assert locks.for_user("alice") is not locks.for_user("bob")

    with locks.hold("alice"):
        # re-entrant
        with locks.hold("alice"):
            pass
