from __future__ import annotations

from typing import Protocol

from .model import ExportTable


class TabularExporter(Protocol):
    mimetype: str

    def write(self, table: ExportTable) -> bytes:
        raise NotImplementedError
