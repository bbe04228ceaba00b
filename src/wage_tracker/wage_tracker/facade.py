from __future__ import annotations

from datetime import date, datetime, tzinfo
from typing import Optional, Sequence

from .common.datetime_utils import YearMonth
from .earnings.model import DailySummary, MonthlySummary
from .earnings.service import SummaryService
from .sessions.model import CurrentSessionView, WorkSession
from .sessions.service import SessionService, TimestampInput
from .users.service import UserService
from .wages.model import WageSetting
from .wages.service import WageService


class WageTracker:
    """Single entry point for the transport layer.

    Only dispatches to the services, after making sure the user record
    exists.
    """

    def __init__(
        self,
        users: UserService,
        wages: WageService,
        sessions: SessionService,
        summaries: SummaryService,
    ):
        self._users = users
        self._wages = wages
        self._sessions = sessions
        self._summaries = summaries

    def login(self, raw_user_id: object) -> str:
        return self._users.login(raw_user_id)

    def get_wage(self, user_id: str) -> Optional[WageSetting]:
        return self._wages.get(user_id)

    def set_wage(self, user_id: str, hourly_wage: object, *, now: Optional[datetime] = None) -> WageSetting:
        self._users.ensure_user(user_id)
        return self._wages.set(user_id, hourly_wage, now=now)

    def start_session(
        self,
        user_id: str,
        *,
        override_wage: Optional[object] = None,
        now: Optional[datetime] = None,
    ) -> WorkSession:
        self._users.ensure_user(user_id)
        return self._sessions.start(user_id, override_wage=override_wage, now=now)

    def stop_session(self, user_id: str, session_id: int, *, now: Optional[datetime] = None) -> WorkSession:
        return self._sessions.stop(user_id, session_id, now=now)

    def current_session(self, user_id: str, *, now: Optional[datetime] = None) -> Optional[CurrentSessionView]:
        return self._sessions.current(user_id, now=now)

    def list_sessions(
        self,
        user_id: str,
        *,
        day: Optional[date] = None,
        month: Optional[YearMonth] = None,
        tz: Optional[tzinfo] = None,
    ) -> Sequence[WorkSession]:
        return self._sessions.list(user_id, day=day, month=month, tz=tz)

    def update_session(
        self,
        user_id: str,
        session_id: int,
        *,
        start_time: TimestampInput = None,
        end_time: TimestampInput = None,
    ) -> WorkSession:
        return self._sessions.update(user_id, session_id, start_time=start_time, end_time=end_time)

    def delete_session(self, user_id: str, session_id: int) -> bool:
        return self._sessions.delete(user_id, session_id)

    def daily_summary(self, user_id: str, day: date, *, tz: Optional[tzinfo] = None) -> DailySummary:
        return self._summaries.daily(user_id, day, tz=tz)

    def monthly_summary(
        self,
        user_id: str,
        year: int,
        month: int,
        *,
        tz: Optional[tzinfo] = None,
    ) -> MonthlySummary:
        return self._summaries.monthly(user_id, year, month, tz=tz)
