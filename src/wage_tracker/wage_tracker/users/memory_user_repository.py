from __future__ import annotations

import threading
from datetime import datetime
from typing import Optional

from .model import User
from .repository import UserRepository


class InMemoryUserRepository(UserRepository):
    def __init__(self):
        self._users: dict[str, User] = {}
        self._lock = threading.Lock()

    def get_by_id(self, user_id: str) -> Optional[User]:
        with self._lock:
            return self._users.get(user_id)

    def ensure(self, user_id: str, *, now: datetime) -> bool:
        with self._lock:
            if user_id in self._users:
                return False
            self._users[user_id] = User(user_id=user_id, created_at=now)
            return True
