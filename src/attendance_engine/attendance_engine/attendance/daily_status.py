from __future__ import annotations

from datetime import date
from typing import Iterable, Sequence

from ..employees.model import Employee
from .model import AttendanceRecord


def resolve_daily_status(
    employees: Sequence[Employee],
    records: Iterable[AttendanceRecord],
    work_date: date,
) -> dict[str, AttendanceRecord]:
    """Map every roster employee to their record for ``work_date``.

    Employees without a record get a synthesized absent record. Records for
    other dates or for employees outside the roster are ignored.
    """
    by_employee: dict[str, AttendanceRecord] = {}
    for r in records:
        if r.work_date == work_date:
            by_employee[r.employee_id] = r

    day_map: dict[str, AttendanceRecord] = {}
    for emp in employees:
        rec = by_employee.get(emp.employee_id)
        day_map[emp.employee_id] = rec or AttendanceRecord.absent(emp.employee_id, work_date, employee_name=emp.name)
    return day_map
