from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..core.enums import AttendanceStatus
from ..core.exceptions import ValidationError


def derive_status(check_in: Optional[datetime], check_out: Optional[datetime]) -> AttendanceStatus:
    if check_in is None:
        return AttendanceStatus.ABSENT
    if check_out is None:
        return AttendanceStatus.WORKING
    return AttendanceStatus.PRESENT


@dataclass(frozen=True)
class AttendanceRecord:
    """Domain entity: one employee's attendance for one calendar day.

    (employee_id, work_date) is the natural key. ``working_minutes`` comes from
    the store and is never recomputed by the engine.
    """

    employee_id: str
    work_date: date
    check_in: Optional[datetime] = None
    check_out: Optional[datetime] = None
    working_minutes: int = 0
    status: AttendanceStatus = AttendanceStatus.ABSENT
    record_id: Optional[str] = None
    employee_name: Optional[str] = None

    def __post_init__(self):
        if self.check_in is None and self.check_out is not None:
            raise ValidationError("check_out requires check_in")
        if self.check_in is not None and self.check_out is not None and self.check_out < self.check_in:
            raise ValidationError("check_out must not be earlier than check_in")
        if self.working_minutes < 0:
            raise ValidationError("working_minutes must not be negative")
        if self.status != derive_status(self.check_in, self.check_out):
            raise ValidationError(
                f"status {self.status.value!r} does not match the record's timestamps"
            )

    @classmethod
    def absent(cls, employee_id: str, work_date: date, *, employee_name: Optional[str] = None) -> "AttendanceRecord":
        """Synthesized default for an employee with no record that day."""
        return cls(employee_id=employee_id, work_date=work_date, employee_name=employee_name)
