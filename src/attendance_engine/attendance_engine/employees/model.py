from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Employee:
    """Domain entity: a roster entry from the employee directory."""

    employee_id: str
    name: str
