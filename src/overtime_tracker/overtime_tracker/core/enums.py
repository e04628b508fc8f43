from __future__ import annotations

from enum import Enum


class ErrorKind(str, Enum):
    """Error conditions surfaced by the overtime lifecycle."""

    MISSING_FIELD = "MISSING_FIELD"
    UNKNOWN_TECHNICIAN = "UNKNOWN_TECHNICIAN"
    DESCRIPTION_TOO_LONG = "DESCRIPTION_TOO_LONG"
    INVALID_TIME_RANGE = "INVALID_TIME_RANGE"
    LOAD_FAILED = "LOAD_FAILED"
    SAVE_FAILED = "SAVE_FAILED"
    DELETE_FAILED = "DELETE_FAILED"
    GUARD_DENIED = "GUARD_DENIED"


class SubmissionMode(str, Enum):
    """Whether a submit creates a new record or overwrites the edited one."""

    CREATE = "CREATE"
    UPDATE = "UPDATE"
