"""Duration and aggregation rules for overtime sessions.

Durations are counted in whole minutes. A session whose end is not after its
start counts as zero: stored data is read defensively even though the validator
never accepts such a record.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Iterable

from .model import OvertimeRecord


@dataclass(frozen=True, order=True)
class Duration:
    hours: int = 0
    minutes: int = 0

    @classmethod
    def zero(cls) -> "Duration":
        return cls()

    @classmethod
    def from_minutes(cls, total_minutes: int) -> "Duration":
        total_minutes = max(int(total_minutes), 0)
        return cls(hours=total_minutes // 60, minutes=total_minutes % 60)

    @property
    def total_minutes(self) -> int:
        return self.hours * 60 + self.minutes

    def __add__(self, other: "Duration") -> "Duration":
        if not isinstance(other, Duration):
            return NotImplemented
        return Duration.from_minutes(self.total_minutes + other.total_minutes)

    def __str__(self) -> str:
        return f"{self.hours:02d}:{self.minutes:02d}"


def elapsed_minutes(start: datetime, end: datetime) -> int:
    if end <= start:
        return 0
    return int((end - start).total_seconds() // 60)


def calculate_duration(start: datetime, end: datetime) -> Duration:
    return Duration.from_minutes(elapsed_minutes(start, end))


def decimal_hours(start: datetime, end: datetime) -> float:
    """Elapsed time as fractional hours (2.5 == 02:30), used for exports."""
    if end <= start:
        return 0.0
    return (end - start).total_seconds() / 3600.0


def record_duration(record: OvertimeRecord) -> Duration:
    return calculate_duration(record.start_time, record.end_time)


def aggregate(records: Iterable[OvertimeRecord]) -> Duration:
    """Total of the per-record durations; each record is floored to whole minutes first."""
    total = sum(elapsed_minutes(r.start_time, r.end_time) for r in records)
    return Duration.from_minutes(total)
