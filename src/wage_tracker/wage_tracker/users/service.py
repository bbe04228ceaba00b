from __future__ import annotations

import logging
from typing import Optional

from ..common.clock import Clock, SystemClock
from ..common.validators import require_user_id
from .model import User
from .repository import UserRepository

logger = logging.getLogger(__name__)


class UserService:
    """Idempotent user upsert. Identity is trusted as-is; there are no credentials."""

    def __init__(self, users: UserRepository, *, clock: Optional[Clock] = None):
        self._users = users
        self._clock = clock or SystemClock()
        self._known: set[str] = set()

    def login(self, raw_user_id: object) -> str:
        user_id = require_user_id(raw_user_id)
        self.ensure_user(user_id)
        return user_id

    def ensure_user(self, user_id: str) -> None:
        if user_id in self._known:
            return
        if self._users.ensure(user_id, now=self._clock.now()):
            logger.info("User created: user=%s", user_id)
        self._known.add(user_id)

    def get(self, user_id: str) -> Optional[User]:
        return self._users.get_by_id(user_id)
