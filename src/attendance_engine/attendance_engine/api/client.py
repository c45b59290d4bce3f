from __future__ import annotations

import logging
import threading
from typing import Any, Optional

import requests

from ..core.constants import DEFAULT_API_TIMEOUT
from ..core.exceptions import (
    AlreadyCheckedIn,
    AlreadyCheckedOut,
    NotCheckedIn,
    StoreError,
    StoreUnavailable,
)

logger = logging.getLogger(__name__)

_ERRORS_BY_CODE: dict[str, type[StoreError]] = {
    "ALREADY_CHECKED_IN": AlreadyCheckedIn,
    "NOT_CHECKED_IN": NotCheckedIn,
    "ALREADY_CHECKED_OUT": AlreadyCheckedOut,
}


def _error_from_response(response: requests.Response) -> StoreError:
    try:
        body = response.json()
    except ValueError:
        body = None
    if not isinstance(body, dict):
        body = {}

    message = body.get("message") or response.text or f"HTTP {response.status_code}"
    if response.status_code >= 500:
        return StoreUnavailable(message)

    error_cls = _ERRORS_BY_CODE.get(str(body.get("code") or "").upper(), StoreError)
    return error_cls(message)


class ApiClient:
    """Thin JSON client for the HR REST backend.

    The bearer token is an argument of every call; nothing is kept in ambient state.
    Without an injected session each thread gets its own ``requests.Session``,
    since one client serves concurrent request threads and the refresh workers.
    """

    def __init__(
        self,
        base_url: str,
        *,
        timeout: float = DEFAULT_API_TIMEOUT,
        session: Optional[requests.Session] = None,
    ):
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._shared_session = session
        self._local = threading.local()

    @property
    def session(self) -> requests.Session:
        if self._shared_session is not None:
            return self._shared_session
        session = getattr(self._local, "session", None)
        if session is None:
            session = requests.Session()
            self._local.session = session
        return session

    def request(
        self,
        method: str,
        endpoint: str,
        *,
        token: Optional[str] = None,
        json: Optional[dict] = None,
        params: Optional[dict] = None,
    ) -> Any:
        headers = {}
        if token:
            headers["Authorization"] = f"Bearer {token}"

        try:
            response = self.session.request(
                method=method,
                url=f"{self._base_url}{endpoint}",
                headers=headers,
                json=json,
                params=params,
                timeout=self._timeout,
            )
        except requests.RequestException as exc:
            logger.error("%s %s failed: %s", method, endpoint, exc)
            raise StoreUnavailable(f"Attendance service unreachable: {exc}") from exc

        if response.status_code >= 400:
            error = _error_from_response(response)
            logger.warning("%s %s -> %s: %s", method, endpoint, response.status_code, error)
            raise error

        try:
            return response.json()
        except ValueError as exc:
            raise StoreUnavailable(f"Invalid JSON from {endpoint}") from exc

    def get(self, endpoint: str, *, token: Optional[str] = None, params: Optional[dict] = None) -> Any:
        return self.request("GET", endpoint, token=token, params=params)

    def post(self, endpoint: str, *, token: Optional[str] = None, json: Optional[dict] = None) -> Any:
        return self.request("POST", endpoint, token=token, json=json)
