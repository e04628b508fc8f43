from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import datetime
from typing import Optional


@dataclass(frozen=True)
class OvertimeRecord:
    """Domain entity: one overtime work session of a technician.

    ``start_time`` and ``end_time`` are timezone-aware (UTC).
    """

    record_id: int
    technician_name: str
    start_time: datetime
    end_time: datetime
    work_description: str = ""


@dataclass(frozen=True)
class RecordDraft:
    """Validated, store-ready record payload (the store assigns the id)."""

    technician_name: str
    start_time: datetime
    end_time: datetime
    work_description: str = ""


@dataclass(frozen=True)
class PendingFields:
    """Form state of a submission; any field may still be missing."""

    technician_name: Optional[str] = None
    start_time: Optional[datetime] = None
    end_time: Optional[datetime] = None
    work_description: str = ""

    @classmethod
    def from_record(cls, record: OvertimeRecord) -> "PendingFields":
        return cls(
            technician_name=record.technician_name,
            start_time=record.start_time,
            end_time=record.end_time,
            work_description=record.work_description or "",
        )

    def with_technician(self, technician_name: Optional[str]) -> "PendingFields":
        return replace(self, technician_name=technician_name)
