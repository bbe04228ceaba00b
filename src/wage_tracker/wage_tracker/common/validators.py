from __future__ import annotations

import re
from typing import Optional

from ..core.constants import USER_ID_MAX_LENGTH
from ..core.exceptions import ValidationError

_USER_ID_RE = re.compile(r"[A-Za-z0-9_-]+")


def require_user_id(value: object) -> str:
    if not isinstance(value, str):
        raise ValidationError("invalid userId")
    user_id = value.strip()
    if not user_id or len(user_id) > USER_ID_MAX_LENGTH or not _USER_ID_RE.fullmatch(user_id):
        raise ValidationError("invalid userId")
    return user_id


def require_positive_int(value: object, field_name: str, *, maximum: Optional[int] = None) -> int:
    # bool is an int subclass; True must not pass as a wage of 1
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValidationError(f"{field_name} must be an integer")
    if value <= 0:
        raise ValidationError(f"{field_name} must be positive")
    if maximum is not None and value > maximum:
        raise ValidationError(f"{field_name} must not exceed {maximum}")
    return value
