from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Optional, Sequence


@dataclass(frozen=True)
class ColumnSpec:
    """Formatting hint for one spreadsheet column (not interpreted by the core)."""

    key: str
    header: str
    width: int
    number_format: Optional[str] = None


@dataclass(frozen=True)
class ExportRow:
    technician: str
    start: datetime
    end: datetime
    description: str
    hours: float

    def as_dict(self) -> dict[str, Any]:
        return {
            "technician": self.technician,
            "start": self.start,
            "end": self.end,
            "description": self.description,
            "hours": self.hours,
        }


@dataclass(frozen=True)
class ExportTable:
    rows: Sequence[ExportRow]
    columns: Sequence[ColumnSpec]
    sheet_name: str
    file_name: str

    def __len__(self) -> int:
        return len(self.rows)
