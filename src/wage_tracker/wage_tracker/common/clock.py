"""Clock abstraction so time-dependent logic can be tested deterministically."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Protocol


class Clock(Protocol):
    def now(self) -> datetime: ...


class SystemClock:
    """Default clock backed by the real system time (UTC)."""

    def now(self) -> datetime:
        return datetime.now(timezone.utc)
