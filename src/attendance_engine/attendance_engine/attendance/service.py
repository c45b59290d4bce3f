from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from datetime import date, datetime
from typing import Callable, Optional

from ..common.datetime_utils import DateLike, now_local
from ..common.validators import require_non_empty
from ..core.constants import MIN_WEEK_OFFSET, NO_VALUE
from ..core.enums import AttendanceStatus, ToggleAction
from ..core.exceptions import StoreError, ToggleFailed
from ..employees.model import Employee
from ..employees.repository import EmployeeDirectory
from .daily_status import resolve_daily_status
from .duration import format_duration, format_time
from .factory import ToggleStrategyFactory
from .inflight import InFlightRegistry
from .model import AttendanceRecord
from .query import RangeQuery, compose_range_query
from .repository import AttendanceStore
from .strategies.base import ToggleStrategy
from .week import (
    WeekWindow,
    clamp_week_offset,
    format_week_range,
    next_week,
    previous_week,
    resolve_week_window,
)

logger = logging.getLogger(__name__)

_ACTION_LABELS = {
    AttendanceStatus.ABSENT: "Check In",
    AttendanceStatus.WORKING: "Check Out",
    AttendanceStatus.PRESENT: "Present",
}


@dataclass(frozen=True)
class WeekView:
    window: WeekWindow
    query: RangeQuery
    records: list[AttendanceRecord]

    @property
    def label(self) -> str:
        return format_week_range(self.window)


class AttendanceService:
    """Attendance window engine for one operator session.

    Holds a transient view (today's status map and the active week's records)
    that is only ever replaced wholesale from the store, never patched locally.
    """

    def __init__(
        self,
        store: AttendanceStore,
        directory: EmployeeDirectory,
        *,
        inflight: Optional[InFlightRegistry] = None,
        strategy_factory: Optional[ToggleStrategyFactory] = None,
        clock: Optional[Callable[[], datetime]] = None,
        weeks_back: int = -MIN_WEEK_OFFSET,
    ):
        self._store = store
        self._directory = directory
        self._inflight = inflight or InFlightRegistry()
        self._factory = strategy_factory or ToggleStrategyFactory()
        self._clock = clock or now_local
        self._weeks_back = int(weeks_back)

        self._employees: list[Employee] = []
        self._work_date: Optional[date] = None
        self._day_map: dict[str, AttendanceRecord] = {}
        self._week: Optional[WeekView] = None

    # ----- read side -----

    @property
    def employees(self) -> list[Employee]:
        return list(self._employees)

    @property
    def day_map(self) -> dict[str, AttendanceRecord]:
        return dict(self._day_map)

    @property
    def week(self) -> Optional[WeekView]:
        return self._week

    def today(self) -> date:
        return self._clock().date()

    def week_window(self, week_offset: int = 0) -> WeekWindow:
        return resolve_week_window(self.today(), clamp_week_offset(week_offset, weeks_back=self._weeks_back))

    def load_today(self) -> dict[str, AttendanceRecord]:
        self._set_today(*self._read_today())
        return dict(self._day_map)

    def _read_today(self) -> tuple[list[Employee], date, dict[str, AttendanceRecord]]:
        work_date = self.today()
        employees = list(self._directory.list_employees())
        records = self._store.query_range(work_date, work_date)
        return employees, work_date, resolve_daily_status(employees, records, work_date)

    def _set_today(self, employees: list[Employee], work_date: date, day_map: dict[str, AttendanceRecord]) -> None:
        self._employees = employees
        self._work_date = work_date
        self._day_map = day_map
        logger.debug("Loaded %d roster entries for %s", len(day_map), work_date)

    def load_week(
        self,
        week_offset: int = 0,
        *,
        from_date: Optional[DateLike] = None,
        to_date: Optional[DateLike] = None,
        employee_id: Optional[str] = None,
    ) -> WeekView:
        window = self.week_window(week_offset)
        query = compose_range_query(window, from_date=from_date, to_date=to_date, employee_id=employee_id)
        view = self._read_week(window, query)
        self._week = view
        return view

    def _read_week(self, window: WeekWindow, query: RangeQuery) -> WeekView:
        records = self._store.query_range(query.from_date, query.to_date, query.employee_id)
        logger.debug("Loaded %d records for %s..%s", len(records), query.from_date, query.to_date)
        return WeekView(
            window=window,
            query=query,
            records=sorted(records, key=lambda r: (r.work_date, r.employee_name or "", r.employee_id)),
        )

    def refresh(self) -> None:
        """Reload today's map and the active week together.

        Both reads run concurrently; the view is replaced only once both have
        succeeded, otherwise it is left as it was.
        """
        if self._week is not None:
            window, query = self._week.window, self._week.query
        else:
            window = self.week_window()
            query = compose_range_query(window)

        with ThreadPoolExecutor(max_workers=2) as pool:
            today_future = pool.submit(self._read_today)
            week_future = pool.submit(self._read_week, window, query)
            # .result() re-raises store errors from the worker threads.
            today = today_future.result()
            week = week_future.result()

        self._set_today(*today)
        self._week = week

    def status_of(self, employee_id: str) -> AttendanceStatus:
        self._ensure_today()
        rec = self._day_map.get(employee_id)
        return rec.status if rec else AttendanceStatus.ABSENT

    def is_in_flight(self, employee_id: str) -> bool:
        return self._inflight.is_in_flight(employee_id, self.today())

    def _ensure_today(self) -> None:
        if self._work_date != self.today():
            self.load_today()

    # ----- toggle state machine -----

    def request_check_in(self, employee_id: str) -> AttendanceRecord:
        return self._run(ToggleAction.CHECK_IN, employee_id)

    def request_check_out(self, employee_id: str) -> AttendanceRecord:
        return self._run(ToggleAction.CHECK_OUT, employee_id)

    def toggle(self, employee_id: str) -> AttendanceRecord:
        """Single switch: check in when absent, check out when working."""
        return self._run(None, employee_id)

    def _run(self, action: Optional[ToggleAction], employee_id: str) -> AttendanceRecord:
        employee_id = require_non_empty(employee_id, "employee_id")
        work_date = self.today()

        with self._inflight.hold(employee_id, work_date):
            current = self.status_of(employee_id)
            strategy: ToggleStrategy
            if action is None:
                strategy = self._factory.for_toggle(employee_id=employee_id, current=current)
            else:
                strategy = self._factory.for_action(action)
            strategy.guard(employee_id, current)

            try:
                strategy.apply(self._store, employee_id)
            except StoreError as exc:
                logger.warning("%s for %s failed: %s", strategy.action.value, employee_id, exc)
                raise ToggleFailed(str(exc), error=exc) from exc

            logger.info("%s recorded for %s on %s", strategy.action.value, employee_id, work_date)
            self.refresh()

        return self._day_map.get(employee_id) or AttendanceRecord.absent(employee_id, work_date)

    # ----- presentation helpers -----

    def get_today_ui(self) -> list[dict]:
        self._ensure_today()
        rows = []
        for emp in self._employees:
            rec = self._day_map[emp.employee_id]
            rows.append(
                {
                    "employee_id": emp.employee_id,
                    "name": emp.name,
                    "check_in": format_time(rec.check_in),
                    "check_out": format_time(rec.check_out),
                    "working_hours": format_duration(rec.working_minutes),
                    "status": rec.status.value,
                    "status_label": rec.status.label,
                    "action": _ACTION_LABELS[rec.status],
                    "in_flight": self.is_in_flight(emp.employee_id),
                }
            )
        return rows

    def get_week_ui(self, view: WeekView) -> dict:
        offset = view.window.week_offset
        prev_offset = previous_week(offset, weeks_back=self._weeks_back)
        next_offset = next_week(offset, weeks_back=self._weeks_back)
        return {
            "week_offset": offset,
            # None disables the button at either end of the range.
            "previous_offset": prev_offset if prev_offset != offset else None,
            "next_offset": next_offset if next_offset != offset else None,
            "days": [d.strftime("%Y-%m-%d") for d in view.window.days()],
            "start": view.query.from_date.strftime("%Y-%m-%d"),
            "end": view.query.to_date.strftime("%Y-%m-%d"),
            "label": view.label,
            "items": [self._to_ui(r) for r in view.records],
        }

    def _to_ui(self, r: AttendanceRecord) -> dict:
        return {
            "date": r.work_date.strftime("%Y-%m-%d"),
            "employee_id": r.employee_id,
            "name": r.employee_name or NO_VALUE,
            "check_in": format_time(r.check_in),
            "check_out": format_time(r.check_out),
            "working_hours": format_duration(r.working_minutes),
            "status": r.status.value,
            "status_label": r.status.label,
        }
