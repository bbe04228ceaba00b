from __future__ import annotations

import threading
from contextlib import contextmanager
from typing import Iterator


class UserLockRegistry:
    """One re-entrant lock per user, created on first use.

    Every read and write of a user's session collection runs under that
    user's lock; different users never contend.
    """

    def __init__(self):
        self._locks: dict[str, threading.RLock] = {}
        self._registry_lock = threading.Lock()

    def for_user(self, user_id: str) -> threading.RLock:
        with self._registry_lock:
            lock = self._locks.get(user_id)
            if lock is None:
                lock = threading.RLock()
                self._locks[user_id] = lock
            return lock

    @contextmanager
    def hold(self, user_id: str) -> Iterator[None]:
        with self.for_user(user_id):
            yield
