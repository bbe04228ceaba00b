from __future__ import annotations

import threading
from typing import Optional

from .model import WageSetting
from .repository import WageRepository


class InMemoryWageRepository(WageRepository):
    def __init__(self):
        self._by_user: dict[str, WageSetting] = {}
        self._lock = threading.Lock()

    def get(self, user_id: str) -> Optional[WageSetting]:
        with self._lock:
            return self._by_user.get(user_id)

    def put(self, user_id: str, setting: WageSetting) -> WageSetting:
        with self._lock:
            self._by_user[user_id] = setting
        return setting
