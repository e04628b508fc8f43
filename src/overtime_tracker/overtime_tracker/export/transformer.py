from __future__ import annotations

from datetime import tzinfo
from typing import Iterable

from ..common.datetime_utils import to_display
from ..core.constants import (
    EXPORT_DATETIME_FORMAT,
    EXPORT_EMPTY_DESCRIPTION,
    EXPORT_FILE_NAME,
    EXPORT_HOURS_FORMAT,
    EXPORT_SHEET_NAME,
)
from ..overtime.duration import decimal_hours
from ..overtime.model import OvertimeRecord
from .model import ColumnSpec, ExportRow, ExportTable

EXPORT_COLUMNS = (
    ColumnSpec(key="technician", header="Técnico", width=25),
    ColumnSpec(key="start", header="Inicio", width=20, number_format=EXPORT_DATETIME_FORMAT),
    ColumnSpec(key="end", header="Fin", width=20, number_format=EXPORT_DATETIME_FORMAT),
    ColumnSpec(key="description", header="Descripción", width=40),
    ColumnSpec(key="hours", header="Horas Trabajadas", width=15, number_format=EXPORT_HOURS_FORMAT),
)


class ExportTransformer:
    """Turn the whole record set into spreadsheet rows.

    Rows are ordered by technician name, then by start time; ``sorted`` is
    stable so ties keep the store order. Hours are decimal (2.5), unlike the
    ``HH:MM`` used on screen.
    """

    def __init__(self, display_tz: tzinfo, *, empty_description: str = EXPORT_EMPTY_DESCRIPTION):
        self._display_tz = display_tz
        self._empty_description = empty_description

    def transform(self, records: Iterable[OvertimeRecord]) -> ExportTable:
        ordered = sorted(records, key=lambda r: (r.technician_name, r.start_time))
        return ExportTable(
            rows=[self._to_row(r) for r in ordered],
            columns=EXPORT_COLUMNS,
            sheet_name=EXPORT_SHEET_NAME,
            file_name=EXPORT_FILE_NAME,
        )

    def _to_row(self, r: OvertimeRecord) -> ExportRow:
        return ExportRow(
            technician=r.technician_name,
            start=to_display(r.start_time, self._display_tz),
            end=to_display(r.end_time, self._display_tz),
            description=r.work_description or self._empty_description,
            hours=decimal_hours(r.start_time, r.end_time),
        )
