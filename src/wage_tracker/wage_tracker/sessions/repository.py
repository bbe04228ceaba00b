from __future__ import annotations

from datetime import datetime
from typing import Optional, Protocol, Sequence

from .model import WorkSession


class SessionRepository(Protocol):
    def get(self, user_id: str, session_id: int) -> Optional[WorkSession]:
        raise NotImplementedError

    def get_open(self, user_id: str) -> Optional[WorkSession]:
        raise NotImplementedError

    def list_for_user(self, user_id: str) -> Sequence[WorkSession]:
        """All sessions of the user, ascending by id."""

        raise NotImplementedError

    def create_open(self, user_id: str, *, start_time: datetime, hourly_wage: int) -> WorkSession:
        """Insert an open session; raises ConflictError if one is already open."""

        raise NotImplementedError

    def close(
        self,
        user_id: str,
        session_id: int,
        *,
        end_time: datetime,
        earned_amount: int,
    ) -> Optional[WorkSession]:
        """Set end time and earnings together. Returns None unless the session was open."""

        raise NotImplementedError

    def update_times(
        self,
        user_id: str,
        session_id: int,
        *,
        start_time: datetime,
        end_time: Optional[datetime],
        earned_amount: Optional[int],
    ) -> Optional[WorkSession]:
        raise NotImplementedError

    def delete(self, user_id: str, session_id: int) -> bool:
        raise NotImplementedError
