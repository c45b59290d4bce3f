from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Union

from ..core.exceptions import ValidationError

DateLike = Union[date, str]


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, "%Y-%m-%d").date()


def format_iso_date(value: date) -> str:
    return value.strftime("%Y-%m-%d")


def coerce_date(value: DateLike, field_name: str) -> date:
    """Accept a date or a YYYY-MM-DD string coming from a query string."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    try:
        return parse_iso_date(str(value).strip())
    except ValueError as exc:
        raise ValidationError(f"{field_name} must be a YYYY-MM-DD date, got {value!r}") from exc


def parse_api_timestamp(value: Optional[str]) -> Optional[datetime]:
    """Parse an ISO-8601 timestamp as sent by the REST backend.

    Accepts a trailing ``Z`` for UTC. Empty values map to None.
    """
    if not value:
        return None
    text = str(value).strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    return datetime.fromisoformat(text)


def parse_api_date(value: Optional[str]) -> Optional[date]:
    """Calendar date of a record.

    The backend stores the day as midnight UTC, so only the leading
    YYYY-MM-DD is read; shifting it into local time would move the day.
    """
    if not value:
        return None
    return parse_iso_date(str(value).strip()[:10])


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now()
