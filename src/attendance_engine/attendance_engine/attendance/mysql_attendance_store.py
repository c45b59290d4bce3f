from __future__ import annotations

from datetime import date, datetime
from typing import Callable, Optional, Sequence

from ..common.datetime_utils import now_local
from ..core.enums import AttendanceStatus
from ..core.exceptions import AlreadyCheckedIn, AlreadyCheckedOut, NotCheckedIn
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .duration import working_minutes
from .model import AttendanceRecord
from .repository import AttendanceStore

_SELECT = """
    SELECT ar.attendance_id, ar.employee_id, e.name AS employee_name, ar.work_date,
           ar.check_in_time, ar.check_out_time, ar.working_minutes, ar.status
    FROM attendance_records ar
    LEFT JOIN employees e ON e.employee_id = ar.employee_id
"""


def _to_record(r: dict) -> AttendanceRecord:
    return AttendanceRecord(
        employee_id=str(r["employee_id"]),
        work_date=r["work_date"],
        check_in=r.get("check_in_time"),
        check_out=r.get("check_out_time"),
        working_minutes=int(r.get("working_minutes") or 0),
        status=AttendanceStatus(r["status"]),
        record_id=str(r["attendance_id"]),
        employee_name=r.get("employee_name"),
    )


class MySQLAttendanceStore(AttendanceStore):
    """Attendance store backed directly by the HR database.

    Mirrors the REST backend's rules: one row per (employee, day), check-out
    recomputes working minutes.
    """

    def __init__(self, conn_factory: DatabaseConnection, *, clock: Optional[Callable[[], datetime]] = None):
        self._conn_factory = conn_factory
        self._clock = clock or now_local

    def query_range(
        self,
        from_date: date,
        to_date: date,
        employee_id: Optional[str] = None,
    ) -> Sequence[AttendanceRecord]:
        clauses = ["ar.work_date BETWEEN %s AND %s"]
        params: list[object] = [from_date, to_date]
        if employee_id is not None:
            clauses.append("ar.employee_id=%s")
            params.append(employee_id)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"{_SELECT} WHERE {' AND '.join(clauses)}", tuple(params))
            return [_to_record(r) for r in fetchall(cur)]

    def _get_for_update(self, cur, employee_id: str, work_date: date) -> Optional[dict]:
        cur.execute(
            f"{_SELECT} WHERE ar.employee_id=%s AND ar.work_date=%s FOR UPDATE",
            (employee_id, work_date),
        )
        return fetchone(cur)

    def check_in(self, employee_id: str) -> AttendanceRecord:
        now = self._clock()
        today = now.date()

        with db_cursor(self._conn_factory) as (_, cur):
            row = self._get_for_update(cur, employee_id, today)
            if row and row.get("check_in_time") is not None:
                raise AlreadyCheckedIn("Employee already checked in today")

            if row:
                cur.execute(
                    """
                    UPDATE attendance_records
                    SET check_in_time=%s, working_minutes=0, status=%s
                    WHERE attendance_id=%s
                    """,
                    (now, AttendanceStatus.WORKING.value, row["attendance_id"]),
                )
            else:
                cur.execute(
                    """
                    INSERT INTO attendance_records(employee_id, work_date, check_in_time, working_minutes, status)
                    VALUES(%s,%s,%s,0,%s)
                    """,
                    (employee_id, today, now, AttendanceStatus.WORKING.value),
                )

            row = self._get_for_update(cur, employee_id, today)
            return _to_record(row)

    def check_out(self, employee_id: str) -> AttendanceRecord:
        now = self._clock()
        today = now.date()

        with db_cursor(self._conn_factory) as (_, cur):
            row = self._get_for_update(cur, employee_id, today)
            if not row or row.get("check_in_time") is None:
                raise NotCheckedIn("Employee has not checked in today")
            if row.get("check_out_time") is not None:
                raise AlreadyCheckedOut("Employee already checked out today")

            minutes = working_minutes(row["check_in_time"], now)
            cur.execute(
                """
                UPDATE attendance_records
                SET check_out_time=%s, working_minutes=%s, status=%s
                WHERE attendance_id=%s
                """,
                (now, minutes, AttendanceStatus.PRESENT.value, row["attendance_id"]),
            )

            row = self._get_for_update(cur, employee_id, today)
            return _to_record(row)
