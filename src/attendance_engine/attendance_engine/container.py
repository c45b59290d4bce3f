from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

import requests

from .api.client import ApiClient
from .attendance.export import WeeklyReportService
from .attendance.factory import ToggleStrategyFactory
from .attendance.http_attendance_store import HttpAttendanceStore
from .attendance.inflight import InFlightRegistry
from .attendance.mysql_attendance_store import MySQLAttendanceStore
from .attendance.repository import AttendanceStore
from .attendance.service import AttendanceService
from .core.constants import DEFAULT_API_TIMEOUT, MIN_WEEK_OFFSET
from .core.exceptions import ValidationError
from .database.connection import DBConfig, DatabaseConnection
from .employees.http_employee_directory import HttpEmployeeDirectory
from .employees.mysql_employee_directory import MySQLEmployeeDirectory
from .employees.repository import EmployeeDirectory

STORE_BACKENDS = {"http", "mysql"}


@dataclass(frozen=True)
class Container:
    """Process-wide pieces; services are built per request with the caller's token."""

    store_backend: str
    api_client: Optional[ApiClient]
    conn: Optional[DatabaseConnection]

    inflight: InFlightRegistry
    strategy_factory: ToggleStrategyFactory
    report_service: WeeklyReportService
    weeks_back: int = -MIN_WEEK_OFFSET

    def attendance_store(self, token: Optional[str] = None) -> AttendanceStore:
        if self.store_backend == "mysql":
            return MySQLAttendanceStore(self.conn)
        return HttpAttendanceStore(self.api_client, token=token)

    def employee_directory(self, token: Optional[str] = None) -> EmployeeDirectory:
        if self.store_backend == "mysql":
            return MySQLEmployeeDirectory(self.conn)
        return HttpEmployeeDirectory(self.api_client, token=token)

    def attendance_service(self, token: Optional[str] = None) -> AttendanceService:
        return AttendanceService(
            self.attendance_store(token),
            self.employee_directory(token),
            inflight=self.inflight,
            strategy_factory=self.strategy_factory,
            weeks_back=self.weeks_back,
        )


def build_container(
    *,
    store_backend: str = "http",
    api_base_url: Optional[str] = None,
    api_timeout: float = DEFAULT_API_TIMEOUT,
    db_config: Optional[dict] = None,
    weeks_back: int = -MIN_WEEK_OFFSET,
    session: Optional[requests.Session] = None,
) -> Container:
    store_backend = str(store_backend).lower()
    if store_backend not in STORE_BACKENDS:
        raise ValidationError(f"STORE_BACKEND must be one of {sorted(STORE_BACKENDS)}, got {store_backend!r}")

    api_client = None
    conn = None
    if store_backend == "http":
        if not api_base_url:
            raise ValidationError("API_BASE_URL is required for the http store backend")
        api_client = ApiClient(api_base_url, timeout=api_timeout, session=session)
    else:
        if not db_config:
            raise ValidationError("DB_CONFIG is required for the mysql store backend")
        conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config))

    return Container(
        store_backend=store_backend,
        api_client=api_client,
        conn=conn,
        inflight=InFlightRegistry(),
        strategy_factory=ToggleStrategyFactory(),
        report_service=WeeklyReportService(),
        weeks_back=int(weeks_back),
    )
