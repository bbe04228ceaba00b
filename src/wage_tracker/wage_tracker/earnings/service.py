from __future__ import annotations

from collections import defaultdict
from datetime import date, timezone, tzinfo
from typing import Optional, Sequence

from ..common.datetime_utils import local_date
from ..core.exceptions import ValidationError
from ..sessions.locks import UserLockRegistry
from ..sessions.model import WorkSession
from ..sessions.repository import SessionRepository
from .model import DailyBreakdownItem, DailySummary, MonthlySummary


class SummaryService:
    """Daily and monthly earnings derived from closed sessions.

    Nothing is persisted; every call recomputes from a snapshot of the
    user's sessions taken under the user's lock. Open sessions are ignored.
    """

    def __init__(
        self,
        sessions: SessionRepository,
        *,
        locks: Optional[UserLockRegistry] = None,
        tz: tzinfo = timezone.utc,
    ):
        self._sessions = sessions
        self._locks = locks or UserLockRegistry()
        self._tz = tz

    def _closed_sessions(self, user_id: str) -> Sequence[WorkSession]:
        with self._locks.hold(user_id):
            items = list(self._sessions.list_for_user(user_id))
        return [s for s in items if not s.is_open]

    def daily(self, user_id: str, day: date, *, tz: Optional[tzinfo] = None) -> DailySummary:
        # A session crossing midnight counts toward both its start and end day.
        tz = tz or self._tz
        total = 0
        for s in self._closed_sessions(user_id):
            if local_date(s.start_time, tz) == day or local_date(s.end_time, tz) == day:
                total += s.earned_amount or 0
        return DailySummary(date=day, total_earned_amount=total)

    def monthly(self, user_id: str, year: int, month: int, *, tz: Optional[tzinfo] = None) -> MonthlySummary:
        """Group closed sessions by end date within year/month."""
        if not 1 <= int(month) <= 12:
            raise ValidationError("month must be 01-12")

        tz = tz or self._tz
        by_day: dict[date, int] = defaultdict(int)
        for s in self._closed_sessions(user_id):
            end_day = local_date(s.end_time, tz)
            if end_day.year == year and end_day.month == month:
                by_day[end_day] += s.earned_amount or 0

        breakdown = [DailyBreakdownItem(date=d, earned_amount=by_day[d]) for d in sorted(by_day)]
        total = sum(item.earned_amount for item in breakdown)
        return MonthlySummary(year=int(year), month=int(month), total_earned_amount=total, daily_breakdown=breakdown)
