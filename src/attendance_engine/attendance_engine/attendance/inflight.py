from __future__ import annotations

import threading
from contextlib import contextmanager
from datetime import date
from typing import Iterator

from ..core.exceptions import OperationInFlight

InFlightKey = tuple[str, date]


class InFlightRegistry:
    """Per-employee-per-day marker that blocks duplicate toggle requests.

    Shared by every request-scoped service so two requests cannot mutate the
    same (employee, day) at once.
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._keys: set[InFlightKey] = set()

    def is_in_flight(self, employee_id: str, work_date: date) -> bool:
        with self._lock:
            return (employee_id, work_date) in self._keys

    @contextmanager
    def hold(self, employee_id: str, work_date: date) -> Iterator[None]:
        key = (employee_id, work_date)
        with self._lock:
            if key in self._keys:
                raise OperationInFlight(f"An attendance update for {employee_id} on {work_date} is already in progress")
            self._keys.add(key)
        try:
            yield
        finally:
            with self._lock:
                self._keys.discard(key)
