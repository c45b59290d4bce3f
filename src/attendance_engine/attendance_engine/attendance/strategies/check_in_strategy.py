from __future__ import annotations

from ...core.enums import AttendanceStatus, ToggleAction
from ...core.exceptions import AlreadyCheckedIn, AlreadyCheckedOut
from ..model import AttendanceRecord
from ..repository import AttendanceStore
from .base import ToggleStrategy


class CheckInStrategy(ToggleStrategy):
    """absent -> working."""

    action = ToggleAction.CHECK_IN

    def guard(self, employee_id: str, current: AttendanceStatus) -> None:
        if current == AttendanceStatus.WORKING:
            raise AlreadyCheckedIn(f"Employee {employee_id} is already checked in")
        if current == AttendanceStatus.PRESENT:
            raise AlreadyCheckedOut(f"Employee {employee_id} has already checked out today")

    def apply(self, store: AttendanceStore, employee_id: str) -> AttendanceRecord:
        return store.check_in(employee_id)
