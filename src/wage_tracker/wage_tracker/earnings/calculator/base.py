from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import datetime

from ...common.datetime_utils import whole_seconds_between


class EarningsCalculator(ABC):
    """Calculator interface (Strategy Pattern for earnings)."""

    @abstractmethod
    def earned_amount(self, hourly_wage: int, elapsed_seconds: int) -> int:
        raise NotImplementedError

    def for_interval(self, hourly_wage: int, start: datetime, end: datetime) -> int:
        return self.earned_amount(hourly_wage, whole_seconds_between(start, end))
