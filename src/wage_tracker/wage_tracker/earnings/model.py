from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date


@dataclass(frozen=True)
class DailySummary:
    date: date
    total_earned_amount: int

    def to_dict(self) -> dict:
        return {"date": self.date.isoformat(), "totalEarnedAmount": self.total_earned_amount}


@dataclass(frozen=True)
class DailyBreakdownItem:
    date: date
    earned_amount: int

    def to_dict(self) -> dict:
        return {"date": self.date.isoformat(), "earnedAmount": self.earned_amount}


@dataclass(frozen=True)
class MonthlySummary:
    """Read-model for a month: per-day totals ascending by date."""

    year: int
    month: int
    total_earned_amount: int
    daily_breakdown: list[DailyBreakdownItem] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "year": self.year,
            "month": self.month,
            "totalEarnedAmount": self.total_earned_amount,
            "dailyBreakdown": [item.to_dict() for item in self.daily_breakdown],
        }
