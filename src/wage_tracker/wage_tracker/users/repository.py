from __future__ import annotations

from datetime import datetime
from typing import Optional, Protocol

from .model import User


class UserRepository(Protocol):
    def get_by_id(self, user_id: str) -> Optional[User]:
        raise NotImplementedError

    def ensure(self, user_id: str, *, now: datetime) -> bool:
        """Create the user if missing. Returns True when a row was created."""

        raise NotImplementedError
