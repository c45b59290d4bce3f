from __future__ import annotations

from ...core.enums import AttendanceStatus, ToggleAction
from ...core.exceptions import AlreadyCheckedOut, NotCheckedIn
from ..model import AttendanceRecord
from ..repository import AttendanceStore
from .base import ToggleStrategy


class CheckOutStrategy(ToggleStrategy):
    """working -> present."""

    action = ToggleAction.CHECK_OUT

    def guard(self, employee_id: str, current: AttendanceStatus) -> None:
        if current == AttendanceStatus.ABSENT:
            raise NotCheckedIn(f"Employee {employee_id} has not checked in today")
        if current == AttendanceStatus.PRESENT:
            raise AlreadyCheckedOut(f"Employee {employee_id} has already checked out today")

    def apply(self, store: AttendanceStore, employee_id: str) -> AttendanceRecord:
        return store.check_out(employee_id)
