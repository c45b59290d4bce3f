from __future__ import annotations

from typing import Optional


class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class InvalidRange(ValidationError):
    """Raised when a date range starts after it ends."""


class OperationInFlight(DomainError):
    """Raised when a toggle for the same employee and day is still pending."""


class StoreError(DomainError):
    """Raised by an attendance store or employee directory.

    The message is the store's own message and is shown to the operator as is.
    """


class AlreadyCheckedIn(StoreError):
    """The employee already has a check-in for the day."""


class NotCheckedIn(StoreError):
    """There is no check-in to check out of."""


class AlreadyCheckedOut(StoreError):
    """The employee already checked out for the day."""


class StoreUnavailable(StoreError):
    """Network or backend failure on any query or mutation."""


class ToggleFailed(DomainError):
    """A check-in/check-out mutation was rejected or failed in the store.

    ``error`` keeps the original store error so callers can tell an outage
    from a state conflict.
    """

    def __init__(self, message: str, *, error: Optional[StoreError] = None):
        super().__init__(message)
        self.error = error
