from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class User:
    """A user scope: owns one wage setting and its work sessions."""

    user_id: str
    created_at: datetime
