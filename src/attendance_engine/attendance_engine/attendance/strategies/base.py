from __future__ import annotations

from abc import ABC, abstractmethod

from ...core.enums import AttendanceStatus, ToggleAction
from ..model import AttendanceRecord
from ..repository import AttendanceStore


class ToggleStrategy(ABC):
    """Strategy Pattern: one operator transition with its guard and its store call."""

    action: ToggleAction

    @abstractmethod
    def guard(self, employee_id: str, current: AttendanceStatus) -> None:
        """Reject the transition locally, before any store call."""

        raise NotImplementedError

    @abstractmethod
    def apply(self, store: AttendanceStore, employee_id: str) -> AttendanceRecord:
        raise NotImplementedError
