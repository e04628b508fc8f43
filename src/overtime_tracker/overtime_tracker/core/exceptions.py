from __future__ import annotations

from .enums import ErrorKind


class DomainError(Exception):
    """Base exception for business rule violations."""

    kind: ErrorKind


class ValidationError(DomainError):
    """Raised when a candidate record is invalid. Never reaches the store."""


class MissingFieldError(ValidationError):
    kind = ErrorKind.MISSING_FIELD


class UnknownTechnicianError(ValidationError):
    kind = ErrorKind.UNKNOWN_TECHNICIAN


class DescriptionTooLongError(ValidationError):
    kind = ErrorKind.DESCRIPTION_TOO_LONG


class InvalidTimeRangeError(ValidationError):
    kind = ErrorKind.INVALID_TIME_RANGE


class StoreError(DomainError):
    """Raised when the record store fails. Not retried automatically."""


class LoadFailedError(StoreError):
    kind = ErrorKind.LOAD_FAILED


class SaveFailedError(StoreError):
    kind = ErrorKind.SAVE_FAILED


class DeleteFailedError(StoreError):
    kind = ErrorKind.DELETE_FAILED


class GuardDeniedError(DomainError):
    """Raised when the bulk-delete confirmation code does not match."""

    kind = ErrorKind.GUARD_DENIED
