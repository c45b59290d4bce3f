from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional

from ..common.datetime_utils import DateLike, coerce_date, format_iso_date
from ..core.exceptions import InvalidRange, ValidationError
from .week import WeekWindow


@dataclass(frozen=True)
class RangeQuery:
    """Normalized range sent to the attendance store (calendar dates only)."""

    from_date: date
    to_date: date
    employee_id: Optional[str] = None

    def to_params(self) -> dict[str, str]:
        params = {"from": format_iso_date(self.from_date), "to": format_iso_date(self.to_date)}
        if self.employee_id:
            params["employeeId"] = self.employee_id
        return params


def compose_range_query(
    window: Optional[WeekWindow] = None,
    *,
    from_date: Optional[DateLike] = None,
    to_date: Optional[DateLike] = None,
    employee_id: Optional[str] = None,
) -> RangeQuery:
    """Build the store query for a week window or an explicit range.

    Explicit bounds win over the window; a missing explicit side is taken from
    the window. A reversed explicit range is a caller error and is never
    corrected.
    """
    start = coerce_date(from_date, "from") if from_date else None
    end = coerce_date(to_date, "to") if to_date else None

    if window is not None:
        start = start or window.start
        end = end or window.end

    if start is None or end is None:
        raise ValidationError("a week window or both from and to are required")
    if start > end:
        raise InvalidRange(f"from {format_iso_date(start)} is after to {format_iso_date(end)}")

    employee_id = str(employee_id).strip() if employee_id else None
    return RangeQuery(from_date=start, to_date=end, employee_id=employee_id or None)
