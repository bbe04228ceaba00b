from __future__ import annotations

import logging
from datetime import datetime
from typing import Optional

from ..common.clock import Clock, SystemClock
from ..common.validators import require_positive_int
from ..core.constants import MAX_HOURLY_WAGE
from .model import WageSetting
from .repository import WageRepository

logger = logging.getLogger(__name__)


class WageService:
    def __init__(self, wages: WageRepository, *, clock: Optional[Clock] = None):
        self._wages = wages
        self._clock = clock or SystemClock()

    def get(self, user_id: str) -> Optional[WageSetting]:
        return self._wages.get(user_id)

    def set(self, user_id: str, hourly_wage: object, *, now: Optional[datetime] = None) -> WageSetting:
        """Replace the user's wage. Open sessions keep the wage frozen at their start."""
        wage = require_positive_int(hourly_wage, "hourlyWage", maximum=MAX_HOURLY_WAGE)
        setting = WageSetting(hourly_wage=wage, updated_at=now or self._clock.now())
        self._wages.put(user_id, setting)
        logger.info("Wage updated: user=%s hourly_wage=%s", user_id, wage)
        return setting
