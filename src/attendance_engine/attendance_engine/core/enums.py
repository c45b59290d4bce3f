from __future__ import annotations

from enum import Enum


class AttendanceStatus(str, Enum):
    """Daily attendance status of one employee."""

    ABSENT = "absent"
    WORKING = "working"
    PRESENT = "present"

    @property
    def label(self) -> str:
        return self.value.capitalize()


class ToggleAction(str, Enum):
    """Operator actions that move an employee through the day."""

    CHECK_IN = "checkin"
    CHECK_OUT = "checkout"
