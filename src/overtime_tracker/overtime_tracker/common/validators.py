from __future__ import annotations

from typing import Any

from ..core.exceptions import DescriptionTooLongError, MissingFieldError


def require_present(value: Any, field_name: str) -> Any:
    if value is None or (isinstance(value, str) and not value.strip()):
        raise MissingFieldError(f"{field_name} is required")
    return value


def require_max_length(value: str, field_name: str, max_len: int) -> str:
    if len(value) > max_len:
        raise DescriptionTooLongError(f"{field_name} must be at most {max_len} characters (got {len(value)})")
    return value
