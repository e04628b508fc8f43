from __future__ import annotations

import io

import pandas as pd
from openpyxl.utils import get_column_letter

from .exporter import TabularExporter
from .model import ExportTable


class ExcelTabularExporter(TabularExporter):
    """Write an export table to an in-memory .xlsx workbook (single sheet)."""

    mimetype = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"

    def write(self, table: ExportTable) -> bytes:
        headers = [c.header for c in table.columns]
        data = [[d[c.key] for c in table.columns] for d in (row.as_dict() for row in table.rows)]
        df = pd.DataFrame(data, columns=headers)

        output = io.BytesIO()
        with pd.ExcelWriter(output, engine="openpyxl") as writer:
            df.to_excel(writer, index=False, sheet_name=table.sheet_name)
            ws = writer.sheets[table.sheet_name]

            for idx, column in enumerate(table.columns, start=1):
                letter = get_column_letter(idx)
                ws.column_dimensions[letter].width = column.width
                if not column.number_format:
                    continue
                # Row 1 holds the headers.
                for row in range(2, len(table.rows) + 2):
                    ws.cell(row=row, column=idx).number_format = column.number_format

        return output.getvalue()
