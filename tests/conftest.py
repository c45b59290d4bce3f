from __future__ import annotations

from datetime import date, datetime
from typing import Callable, Optional

import pytest

from src.attendance_engine.attendance_engine.attendance.duration import working_minutes
from src.attendance_engine.attendance_engine.attendance.model import AttendanceRecord, derive_status
from src.attendance_engine.attendance_engine.core.exceptions import AlreadyCheckedIn, AlreadyCheckedOut, NotCheckedIn
from src.attendance_engine.attendance_engine.employees.model import Employee


class Clock:
    """Mutable clock so a test can move time between check-in and check-out."""

    def __init__(self, now: datetime):
        self.now = now

    def __call__(self) -> datetime:
        return self.now


class InMemoryDirectory:
    def __init__(self, employees: list[Employee]):
        self.employees = employees
        self.calls = 0

    def list_employees(self):
        self.calls += 1
        return list(self.employees)


class InMemoryAttendanceStore:
    """Behaves like the REST backend: one record per (employee, day)."""

    def __init__(self, clock: Callable[[], datetime], names: Optional[dict[str, str]] = None):
        self._clock = clock
        self._names = names or {}
        self._by_employee_date: dict[tuple[str, date], AttendanceRecord] = {}
        self.calls: list[tuple] = []
        self.fail_with: Optional[Exception] = None
        self.on_query: Optional[Callable[[], None]] = None

    def add(self, record: AttendanceRecord) -> None:
        self._by_employee_date[(record.employee_id, record.work_date)] = record

    def query_range(self, from_date: date, to_date: date, employee_id: Optional[str] = None):
        self.calls.append(("query_range", from_date, to_date, employee_id))
        if self.on_query:
            self.on_query()
        return [
            r
            for (emp, day), r in self._by_employee_date.items()
            if from_date <= day <= to_date and (employee_id is None or emp == employee_id)
        ]

    def _mutate(self, employee_id: str, *, check_in=None, check_out=None) -> AttendanceRecord:
        rec = AttendanceRecord(
            employee_id=employee_id,
            work_date=self._clock().date(),
            check_in=check_in,
            check_out=check_out,
            working_minutes=working_minutes(check_in, check_out),
            status=derive_status(check_in, check_out),
            record_id=f"{employee_id}-{self._clock().date()}",
            employee_name=self._names.get(employee_id),
        )
        self.add(rec)
        return rec

    def check_in(self, employee_id: str) -> AttendanceRecord:
        self.calls.append(("check_in", employee_id))
        if self.fail_with:
            raise self.fail_with
        now = self._clock()
        existing = self._by_employee_date.get((employee_id, now.date()))
        if existing and existing.check_in is not None:
            raise AlreadyCheckedIn("Already checked in")
        return self._mutate(employee_id, check_in=now)

    def check_out(self, employee_id: str) -> AttendanceRecord:
        self.calls.append(("check_out", employee_id))
        if self.fail_with:
            raise self.fail_with
        now = self._clock()
        existing = self._by_employee_date.get((employee_id, now.date()))
        if not existing or existing.check_in is None:
            raise NotCheckedIn("Not checked in")
        if existing.check_out is not None:
            raise AlreadyCheckedOut("Already checked out")
        return self._mutate(employee_id, check_in=existing.check_in, check_out=now)

    def mutations(self) -> list[tuple]:
        return [c for c in self.calls if c[0] != "query_range"]


@pytest.fixture
def fixed_now() -> datetime:
    # Wednesday
    return datetime(2024, 6, 12, 8, 30, 0)


@pytest.fixture
def clock(fixed_now) -> Clock:
    return Clock(fixed_now)


@pytest.fixture
def roster() -> list[Employee]:
    return [
        Employee(employee_id="e1", name="Alice"),
        Employee(employee_id="e2", name="Bob"),
        Employee(employee_id="e3", name="Chloe"),
    ]


@pytest.fixture
def directory(roster) -> InMemoryDirectory:
    return InMemoryDirectory(roster)


@pytest.fixture
def store(clock, roster) -> InMemoryAttendanceStore:
    return InMemoryAttendanceStore(clock, names={e.employee_id: e.name for e in roster})
