from __future__ import annotations

from typing import Optional, Protocol

from .model import WageSetting


class WageRepository(Protocol):
    def get(self, user_id: str) -> Optional[WageSetting]:
        raise NotImplementedError

    def put(self, user_id: str, setting: WageSetting) -> WageSetting:
        raise NotImplementedError
