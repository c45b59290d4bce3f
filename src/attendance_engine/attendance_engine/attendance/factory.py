from __future__ import annotations

from dataclasses import dataclass

from ..core.enums import AttendanceStatus, ToggleAction
from ..core.exceptions import AlreadyCheckedOut, ValidationError
from .strategies.base import ToggleStrategy
from .strategies.check_in_strategy import CheckInStrategy
from .strategies.check_out_strategy import CheckOutStrategy


@dataclass
class ToggleStrategyFactory:
    """Factory Pattern: choose the transition for an action or for the current status."""

    def for_action(self, action: ToggleAction) -> ToggleStrategy:
        if action == ToggleAction.CHECK_IN:
            return CheckInStrategy()
        if action == ToggleAction.CHECK_OUT:
            return CheckOutStrategy()
        raise ValidationError(f"Unknown attendance action: {action!r}")

    def for_toggle(self, *, employee_id: str, current: AttendanceStatus) -> ToggleStrategy:
        if current == AttendanceStatus.ABSENT:
            return CheckInStrategy()
        if current == AttendanceStatus.WORKING:
            return CheckOutStrategy()
        raise AlreadyCheckedOut(f"Employee {employee_id} has already checked out today")
