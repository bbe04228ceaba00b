from __future__ import annotations

from ...core.constants import SECONDS_PER_HOUR
from .base import EarningsCalculator


class StandardEarningsCalculator(EarningsCalculator):
    """Standard rule: floor(wage * seconds / 3600), never rounded up, not below 0."""

    def earned_amount(self, hourly_wage: int, elapsed_seconds: int) -> int:
        seconds = max(int(elapsed_seconds), 0)
        return (int(hourly_wage) * seconds) // SECONDS_PER_HOUR
