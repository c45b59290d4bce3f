from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from .model import AttendanceRecord


class AttendanceStore(Protocol):
    """The attendance backend. It owns every record; the engine only reads and asks for mutations."""

    def query_range(
        self,
        from_date: date,
        to_date: date,
        employee_id: Optional[str] = None,
    ) -> Sequence[AttendanceRecord]:
        """Records whose date falls in [from_date, to_date]; order is not guaranteed."""

        raise NotImplementedError

    def check_in(self, employee_id: str) -> AttendanceRecord:
        """Raises AlreadyCheckedIn when today's record already has a check-in."""

        raise NotImplementedError

    def check_out(self, employee_id: str) -> AttendanceRecord:
        """Raises NotCheckedIn or AlreadyCheckedOut."""

        raise NotImplementedError
