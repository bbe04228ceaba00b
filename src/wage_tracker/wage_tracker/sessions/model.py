from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..common.datetime_utils import format_instant
from ..core.enums import SessionState


@dataclass(frozen=True)
class WorkSession:
    """Domain entity: one clock-in/clock-out span.

    ``hourly_wage`` is the rate frozen at start. ``end_time`` and
    ``earned_amount`` are always set together.
    """

    session_id: int
    user_id: str
    start_time: datetime
    hourly_wage: int
    end_time: Optional[datetime] = None
    earned_amount: Optional[int] = None

    @property
    def state(self) -> SessionState:
        return SessionState.OPEN if self.end_time is None else SessionState.CLOSED

    @property
    def is_open(self) -> bool:
        return self.state is SessionState.OPEN

    def to_dict(self) -> dict:
        return {
            "id": self.session_id,
            "startTime": format_instant(self.start_time),
            "endTime": format_instant(self.end_time) if self.end_time else None,
            "hourlyWage": self.hourly_wage,
            "earnedAmount": self.earned_amount,
        }


@dataclass(frozen=True)
class CurrentSessionView:
    """Live projection of the open session; never stored."""

    session_id: int
    start_time: datetime
    hourly_wage: int
    elapsed_seconds: int
    current_earned_amount: int

    def to_dict(self) -> dict:
        return {
            "id": self.session_id,
            "startTime": format_instant(self.start_time),
            "hourlyWage": self.hourly_wage,
            "elapsedSeconds": self.elapsed_seconds,
            "currentEarnedAmount": self.current_earned_amount,
        }
