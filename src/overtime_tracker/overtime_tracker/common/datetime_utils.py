from __future__ import annotations

from datetime import datetime, timezone, tzinfo
from zoneinfo import ZoneInfo

FORM_DATETIME_FORMAT = "%Y-%m-%dT%H:%M"


def get_zone(name: str) -> ZoneInfo:
    return ZoneInfo(name)


def now_utc() -> datetime:
    """Current time in the storage zone.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now(timezone.utc)


def to_utc(value: datetime, *, assume_tz: tzinfo) -> datetime:
    """Normalize a timestamp to UTC.

    Naive values are read as wall-clock time in ``assume_tz`` (the display zone).
    """
    if value.tzinfo is None:
        value = value.replace(tzinfo=assume_tz)
    return value.astimezone(timezone.utc)


def from_storage(value: datetime) -> datetime:
    """Re-attach UTC to naive DATETIME values read back from MySQL."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def to_storage(value: datetime) -> datetime:
    """MySQL DATETIME has no zone: store naive UTC."""
    return value.astimezone(timezone.utc).replace(tzinfo=None)


def to_display(value: datetime, tz: tzinfo) -> datetime:
    """Wall-clock time in the display zone, without tzinfo (spreadsheet cells)."""
    return from_storage(value).astimezone(tz).replace(tzinfo=None)


def parse_form_datetime(value: str | None, tz: tzinfo) -> datetime | None:
    """Parse a ``YYYY-MM-DDTHH:MM`` form value (display zone) into UTC.

    Full ISO-8601 strings with an explicit offset are accepted too.
    Returns None for empty input so the validator can report the missing field.
    """
    if value is None or not str(value).strip():
        return None
    text = str(value).strip()
    try:
        parsed = datetime.strptime(text, FORM_DATETIME_FORMAT)
    except ValueError:
        parsed = datetime.fromisoformat(text)
    return to_utc(parsed, assume_tz=tz)


def format_form_datetime(value: datetime, tz: tzinfo) -> str:
    return to_display(value, tz).strftime(FORM_DATETIME_FORMAT)
