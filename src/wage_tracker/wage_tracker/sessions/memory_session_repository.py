from __future__ import annotations

import threading
from dataclasses import replace
from datetime import datetime
from typing import Optional, Sequence

from ..core.exceptions import ConflictError
from .model import WorkSession
from .repository import SessionRepository


class InMemorySessionRepository(SessionRepository):
    """Process-local store. Entities are frozen and replaced on every change."""

    def __init__(self):
        self._by_user: dict[str, dict[int, WorkSession]] = {}
        self._next_id: dict[str, int] = {}
        self._lock = threading.Lock()

    def get(self, user_id: str, session_id: int) -> Optional[WorkSession]:
        with self._lock:
            return self._by_user.get(user_id, {}).get(int(session_id))

    def get_open(self, user_id: str) -> Optional[WorkSession]:
        with self._lock:
            return self._find_open(user_id)

    def list_for_user(self, user_id: str) -> Sequence[WorkSession]:
        with self._lock:
            items = list(self._by_user.get(user_id, {}).values())
        items.sort(key=lambda s: s.session_id)
        return items

    def create_open(self, user_id: str, *, start_time: datetime, hourly_wage: int) -> WorkSession:
        with self._lock:
            if self._find_open(user_id) is not None:
                raise ConflictError("session already started")

            session_id = self._next_id.get(user_id, 1)
            self._next_id[user_id] = session_id + 1

            session = WorkSession(
                session_id=session_id,
                user_id=user_id,
                start_time=start_time,
                hourly_wage=hourly_wage,
            )
            self._by_user.setdefault(user_id, {})[session_id] = session
            return session

    def close(
        self,
        user_id: str,
        session_id: int,
        *,
        end_time: datetime,
        earned_amount: int,
    ) -> Optional[WorkSession]:
        with self._lock:
            sessions = self._by_user.get(user_id, {})
            current = sessions.get(int(session_id))
            if current is None or not current.is_open:
                return None
            closed = replace(current, end_time=end_time, earned_amount=earned_amount)
            sessions[current.session_id] = closed
            return closed

    def update_times(
        self,
        user_id: str,
        session_id: int,
        *,
        start_time: datetime,
        end_time: Optional[datetime],
        earned_amount: Optional[int],
    ) -> Optional[WorkSession]:
        with self._lock:
            sessions = self._by_user.get(user_id, {})
            current = sessions.get(int(session_id))
            if current is None:
                return None
            updated = replace(current, start_time=start_time, end_time=end_time, earned_amount=earned_amount)
            sessions[current.session_id] = updated
            return updated

    def delete(self, user_id: str, session_id: int) -> bool:
        with self._lock:
            return self._by_user.get(user_id, {}).pop(int(session_id), None) is not None

    def _find_open(self, user_id: str) -> Optional[WorkSession]:
        for session in self._by_user.get(user_id, {}).values():
            if session.is_open:
                return session
        return None
