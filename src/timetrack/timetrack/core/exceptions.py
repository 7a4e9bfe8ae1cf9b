from __future__ import annotations


class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class DuplicateRecordError(ValidationError):
    """A record already exists for this employee and date."""


class NotCheckedInError(ValidationError):
    """Check-out attempted on a record without a check-in."""


class AlreadyCheckedOutError(ValidationError):
    """Check-out attempted twice; edits go through the manual path."""


class InvalidTimeRangeError(ValidationError):
    """Check-out precedes check-in."""


class FutureDateError(ValidationError):
    """Manual entry for a date after the actor's current date."""


class OutsideBackfillWindowError(ValidationError):
    """Manual entry older than the previous calendar month."""


class NotFoundError(DomainError):
    """Raised when the addressed record does not exist."""


class AuthorizationError(DomainError):
    """Raised when a profile lacks permission for an action."""


class PersistError(DomainError):
    """Remote store rejected or failed a write.

    Raised after the optimistic local update has already been applied.
    """

    def __init__(self, message: str, *, reason: str | None = None):
        super().__init__(message)
        self.reason = reason or message
