from __future__ import annotations

from datetime import datetime
from typing import Optional

from ..core.constants import NO_VALUE
from ..core.exceptions import ValidationError


def working_minutes(check_in: Optional[datetime], check_out: Optional[datetime]) -> int:
    """Whole minutes between check-in and check-out (floor); 0 while either is missing."""
    if check_in is None or check_out is None:
        return 0
    if check_out < check_in:
        raise ValidationError("check_out must not be earlier than check_in")
    return int((check_out - check_in).total_seconds() // 60)


def format_duration(minutes: Optional[int]) -> str:
    if minutes is None or minutes <= 0:
        return NO_VALUE
    minutes = int(minutes)
    return f"{minutes // 60}h {minutes % 60}m"


def format_time(value: Optional[datetime]) -> str:
    if value is None:
        return NO_VALUE
    if value.tzinfo is not None:
        value = value.astimezone()
    return value.strftime("%H:%M:%S")
