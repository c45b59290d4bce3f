from __future__ import annotations

from typing import Optional, Sequence

from ..api.client import ApiClient
from ..core.exceptions import StoreError
from .model import Employee
from .repository import EmployeeDirectory


class HttpEmployeeDirectory(EmployeeDirectory):
    def __init__(self, client: ApiClient, *, token: Optional[str] = None):
        self._client = client
        self._token = token

    def list_employees(self) -> Sequence[Employee]:
        data = self._client.get("/admin/employees", token=self._token)
        if not isinstance(data, list):
            raise StoreError("Unexpected employee list payload")
        return [
            Employee(employee_id=str(e["_id"]), name=str(e.get("name") or ""))
            for e in data
            if e.get("_id")
        ]
