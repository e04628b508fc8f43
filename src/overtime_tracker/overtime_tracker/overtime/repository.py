from __future__ import annotations

from typing import Protocol, Sequence

from .model import OvertimeRecord, RecordDraft


class RecordStore(Protocol):
    def list_by_technician(self, technician_name: str) -> Sequence[OvertimeRecord]:
        """Records of one technician, most recent start first."""

        raise NotImplementedError

    def list_all(self) -> Sequence[OvertimeRecord]:
        raise NotImplementedError

    def create(self, draft: RecordDraft) -> int:
        raise NotImplementedError

    def update_by_id(self, record_id: int, draft: RecordDraft) -> bool:
        raise NotImplementedError

    def delete_by_id(self, record_id: int) -> bool:
        raise NotImplementedError

    def delete_all(self) -> int:
        raise NotImplementedError
