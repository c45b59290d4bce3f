from __future__ import annotations

from datetime import date
from typing import Optional, Sequence

from ..api.client import ApiClient
from ..common.datetime_utils import format_iso_date, parse_api_date, parse_api_timestamp
from ..core.constants import RANGE_QUERY_PAGE_LIMIT
from ..core.enums import AttendanceStatus
from ..core.exceptions import DomainError, StoreError
from .model import AttendanceRecord, derive_status
from .repository import AttendanceStore


def record_from_item(item: dict, *, employee_id: Optional[str] = None) -> AttendanceRecord:
    """Map one ``/admin/attendance`` item onto the domain record."""
    default_employee_id = employee_id
    employee = item.get("employee")
    if isinstance(employee, dict):
        employee_id = employee.get("_id")
        employee_name = employee.get("name")
    else:
        employee_id = employee or item.get("employeeId") or default_employee_id
        employee_name = None

    try:
        work_date = parse_api_date(item.get("attendanceDate") or item.get("date"))
        check_in = parse_api_timestamp(item.get("checkIn"))
        check_out = parse_api_timestamp(item.get("checkOut"))
        status = AttendanceStatus(item["status"]) if item.get("status") else derive_status(check_in, check_out)
        if not employee_id or work_date is None:
            raise ValueError("missing employee or attendanceDate")

        return AttendanceRecord(
            employee_id=str(employee_id),
            work_date=work_date,
            check_in=check_in,
            check_out=check_out,
            working_minutes=int(item.get("workingMinutes") or 0),
            status=status,
            record_id=str(item["_id"]) if item.get("_id") else None,
            employee_name=employee_name,
        )
    except (ValueError, TypeError, DomainError) as exc:
        raise StoreError(f"Malformed attendance record {item.get('_id')!r}: {exc}") from exc


def _unwrap(data) -> dict:
    # Mutations answer either with the record or with {"message", "attendance"}.
    if isinstance(data, dict) and isinstance(data.get("attendance"), dict):
        return data["attendance"]
    if not isinstance(data, dict):
        raise StoreError("Unexpected attendance payload")
    return data


class HttpAttendanceStore(AttendanceStore):
    def __init__(self, client: ApiClient, *, token: Optional[str] = None):
        self._client = client
        self._token = token

    def query_range(
        self,
        from_date: date,
        to_date: date,
        employee_id: Optional[str] = None,
    ) -> Sequence[AttendanceRecord]:
        params = {
            "from": format_iso_date(from_date),
            "to": format_iso_date(to_date),
            "page": 1,
            "limit": RANGE_QUERY_PAGE_LIMIT,
        }
        if employee_id:
            params["employeeId"] = employee_id

        data = self._client.get("/admin/attendance", token=self._token, params=params)
        items = data.get("items", []) if isinstance(data, dict) else data
        return [record_from_item(it) for it in items or []]

    def check_in(self, employee_id: str) -> AttendanceRecord:
        data = self._client.post("/admin/attendance/checkin", token=self._token, json={"employeeId": employee_id})
        return record_from_item(_unwrap(data), employee_id=employee_id)

    def check_out(self, employee_id: str) -> AttendanceRecord:
        data = self._client.post("/admin/attendance/checkout", token=self._token, json={"employeeId": employee_id})
        return record_from_item(_unwrap(data), employee_id=employee_id)
