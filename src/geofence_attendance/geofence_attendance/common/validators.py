from __future__ import annotations

import math
import re
from typing import Any, Optional

from ..core.exceptions import ValidationError


def require_non_empty(value: Optional[str], field_name: str) -> str:
    if not value or not str(value).strip():
        raise ValidationError(f"{field_name} is required")
    return str(value).strip()


def require_user_id(value: Optional[str], pattern: str) -> str:
    user_id = require_non_empty(value, "UserID")
    if not re.match(pattern, user_id):
        raise ValidationError("Invalid UserID format")
    return user_id


def parse_coordinate(value: Any, field_name: str, *, limit: float) -> Optional[float]:
    """Parse a latitude/longitude; ``None`` means the kiosk had no fix."""
    if value is None or (isinstance(value, str) and not value.strip()):
        return None
    if isinstance(value, bool):
        raise ValidationError(f"{field_name} must be a number")
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field_name} must be a number") from None
    if not math.isfinite(number) or abs(number) > limit:
        raise ValidationError(f"{field_name} out of range")
    return number
