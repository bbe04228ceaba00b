from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from ..common.datetime_utils import format_instant


@dataclass(frozen=True)
class WageSetting:
    """Current hourly wage of a user. Replaced wholesale on update."""

    hourly_wage: int
    updated_at: datetime

    def to_dict(self) -> dict:
        return {"hourlyWage": self.hourly_wage, "updatedAt": format_instant(self.updated_at)}
