from __future__ import annotations

from typing import Protocol, Sequence

from .model import Employee


class EmployeeDirectory(Protocol):
    """Roster source used to synthesize absent defaults.

    Note (DIP): the service depends on this interface, not on a concrete backend.
    """

    def list_employees(self) -> Sequence[Employee]:
        raise NotImplementedError
