from __future__ import annotations

import logging
from datetime import date, datetime, timezone, tzinfo
from typing import Optional, Sequence, Union

from ..common.clock import Clock, SystemClock
from ..common.datetime_utils import YearMonth, local_date, local_year_month, parse_instant, whole_seconds_between
from ..common.validators import require_positive_int
from ..core.constants import MAX_HOURLY_WAGE
from ..core.exceptions import ConflictError, NotFoundError, ValidationError
from ..earnings.calculator.base import EarningsCalculator
from ..earnings.calculator.standard_calculator import StandardEarningsCalculator
from ..wages.repository import WageRepository
from .locks import UserLockRegistry
from .model import CurrentSessionView, WorkSession
from .repository import SessionRepository

logger = logging.getLogger(__name__)

TimestampInput = Union[datetime, str, None]


def _coerce_instant(value: TimestampInput, field_name: str) -> Optional[datetime]:
    if value is None or isinstance(value, datetime):
        if isinstance(value, datetime) and value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value
    try:
        return parse_instant(value)
    except (TypeError, ValueError) as exc:
        raise ValidationError(f"Invalid {field_name}") from exc


def _touches_date(session: WorkSession, day: date, tz: tzinfo) -> bool:
    if local_date(session.start_time, tz) == day:
        return True
    return session.end_time is not None and local_date(session.end_time, tz) == day


def _touches_month(session: WorkSession, ym: YearMonth, tz: tzinfo) -> bool:
    if local_year_month(session.start_time, tz) == ym:
        return True
    return session.end_time is not None and local_year_month(session.end_time, tz) == ym


class SessionService:
    """Clock-in/clock-out state machine, one open session per user at most.

    Mutations and reads of a user's sessions run under that user's lock from
    ``UserLockRegistry``, so concurrent request handlers never race on the
    open-session check and never see a half-applied change.
    """

    def __init__(
        self,
        sessions: SessionRepository,
        wages: WageRepository,
        *,
        locks: Optional[UserLockRegistry] = None,
        calculator: Optional[EarningsCalculator] = None,
        clock: Optional[Clock] = None,
        tz: tzinfo = timezone.utc,
    ):
        self._sessions = sessions
        self._wages = wages
        self._locks = locks or UserLockRegistry()
        self._calculator = calculator or StandardEarningsCalculator()
        self._clock = clock or SystemClock()
        self._tz = tz

    def start(
        self,
        user_id: str,
        *,
        override_wage: Optional[object] = None,
        now: Optional[datetime] = None,
    ) -> WorkSession:
        with self._locks.hold(user_id):
            if self._sessions.get_open(user_id) is not None:
                logger.debug("Rejected start, session already open: user=%s", user_id)
                raise ConflictError("session already started")

            if override_wage is not None:
                wage = require_positive_int(override_wage, "hourlyWageOverride", maximum=MAX_HOURLY_WAGE)
            else:
                setting = self._wages.get(user_id)
                if setting is None:
                    raise ValidationError("hourly wage is not set")
                wage = setting.hourly_wage

            session = self._sessions.create_open(
                user_id,
                start_time=now or self._clock.now(),
                hourly_wage=wage,
            )

        logger.info("Session started: user=%s id=%s hourly_wage=%s", user_id, session.session_id, wage)
        return session

    def stop(self, user_id: str, session_id: int, *, now: Optional[datetime] = None) -> WorkSession:
        with self._locks.hold(user_id):
            session = self._sessions.get(user_id, session_id)
            if session is None:
                raise NotFoundError("Session not found")
            if not session.is_open:
                raise ConflictError("Session already stopped")

            end_time = now or self._clock.now()
            earned = self._calculator.for_interval(session.hourly_wage, session.start_time, end_time)
            closed = self._sessions.close(user_id, session_id, end_time=end_time, earned_amount=earned)
            if closed is None:
                # Closed by another process sharing the store.
                raise ConflictError("Session already stopped")

        logger.info("Session stopped: user=%s id=%s earned=%s", user_id, session_id, earned)
        return closed

    def current(self, user_id: str, *, now: Optional[datetime] = None) -> Optional[CurrentSessionView]:
        with self._locks.hold(user_id):
            session = self._sessions.get_open(user_id)
        if session is None:
            return None

        elapsed = whole_seconds_between(session.start_time, now or self._clock.now())
        return CurrentSessionView(
            session_id=session.session_id,
            start_time=session.start_time,
            hourly_wage=session.hourly_wage,
            elapsed_seconds=elapsed,
            current_earned_amount=self._calculator.earned_amount(session.hourly_wage, elapsed),
        )

    def list(
        self,
        user_id: str,
        *,
        day: Optional[date] = None,
        month: Optional[YearMonth] = None,
        tz: Optional[tzinfo] = None,
    ) -> Sequence[WorkSession]:
        """Sessions ascending by id; a date filter takes precedence over a month filter."""
        tz = tz or self._tz
        with self._locks.hold(user_id):
            items = list(self._sessions.list_for_user(user_id))

        if day is not None:
            return [s for s in items if _touches_date(s, day, tz)]
        if month is not None:
            return [s for s in items if _touches_month(s, month, tz)]
        return items

    def update(
        self,
        user_id: str,
        session_id: int,
        *,
        start_time: TimestampInput = None,
        end_time: TimestampInput = None,
    ) -> WorkSession:
        """Edit start and/or end.

        Whenever the result has both a start and an end, ``earned_amount`` is
        recomputed from the frozen wage. Giving an end to an open session
        closes it.
        """
        if start_time is None and end_time is None:
            raise ValidationError("startTime or endTime required")

        new_start = _coerce_instant(start_time, "startTime")
        new_end = _coerce_instant(end_time, "endTime")

        with self._locks.hold(user_id):
            session = self._sessions.get(user_id, session_id)
            if session is None:
                raise NotFoundError("Session not found")

            start = new_start or session.start_time
            end = new_end or session.end_time
            if end is not None and end < start:
                raise ValidationError("endTime must not be before startTime")

            earned = self._calculator.for_interval(session.hourly_wage, start, end) if end is not None else None
            updated = self._sessions.update_times(
                user_id,
                session_id,
                start_time=start,
                end_time=end,
                earned_amount=earned,
            )
            if updated is None:
                raise NotFoundError("Session not found")

        logger.info("Session updated: user=%s id=%s earned=%s", user_id, session_id, earned)
        return updated

    def delete(self, user_id: str, session_id: int) -> bool:
        with self._locks.hold(user_id):
            deleted = self._sessions.delete(user_id, session_id)
        if deleted:
            logger.info("Session deleted: user=%s id=%s", user_id, session_id)
        return deleted
