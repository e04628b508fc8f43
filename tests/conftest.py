from __future__ import annotations

from datetime import datetime, timezone
from typing import Optional

import pytest

from overtime_tracker.common.datetime_utils import get_zone
from overtime_tracker.export.transformer import ExportTransformer
from overtime_tracker.overtime.guard import BulkDeleteGuard
from overtime_tracker.overtime.model import OvertimeRecord, RecordDraft
from overtime_tracker.overtime.service import OvertimeLifecycleService
from overtime_tracker.overtime.validator import RecordValidator
from overtime_tracker.preferences.session_preferences import InMemoryPreferenceStore

ROSTER = ("Ana", "Bruno", "Carla")
NOW = datetime(2024, 1, 1, 15, 0, tzinfo=timezone.utc)


def utc(*args) -> datetime:
    return datetime(*args, tzinfo=timezone.utc)


class InMemoryRecordStore:
    """Record store fake that logs every call and can be told to fail."""

    def __init__(self, records: Optional[list[OvertimeRecord]] = None):
        self._records: dict[int, OvertimeRecord] = {}
        self._next_id = 1
        self.calls: list[str] = []
        self.fail_on: set[str] = set()
        for r in records or []:
            self._records[r.record_id] = r
            self._next_id = max(self._next_id, r.record_id + 1)

    def _call(self, name: str) -> None:
        self.calls.append(name)
        if name in self.fail_on:
            raise ConnectionError(f"{name} unavailable")

    def list_by_technician(self, technician_name):
        self._call("list_by_technician")
        items = [r for r in self._records.values() if r.technician_name == technician_name]
        items.sort(key=lambda r: r.start_time, reverse=True)
        return items

    def list_all(self):
        self._call("list_all")
        return list(self._records.values())

    def create(self, draft: RecordDraft) -> int:
        self._call("create")
        rid = self._next_id
        self._next_id += 1
        self._records[rid] = OvertimeRecord(
            record_id=rid,
            technician_name=draft.technician_name,
            start_time=draft.start_time,
            end_time=draft.end_time,
            work_description=draft.work_description,
        )
        return rid

    def update_by_id(self, record_id, draft: RecordDraft) -> bool:
        self._call("update_by_id")
        if record_id not in self._records:
            return False
        self._records[record_id] = OvertimeRecord(
            record_id=record_id,
            technician_name=draft.technician_name,
            start_time=draft.start_time,
            end_time=draft.end_time,
            work_description=draft.work_description,
        )
        return True

    def delete_by_id(self, record_id) -> bool:
        self._call("delete_by_id")
        return self._records.pop(record_id, None) is not None

    def delete_all(self) -> int:
        self._call("delete_all")
        removed = len(self._records)
        self._records.clear()
        return removed

    def get(self, record_id) -> Optional[OvertimeRecord]:
        return self._records.get(record_id)


@pytest.fixture
def store():
    return InMemoryRecordStore(
        [
            OvertimeRecord(1, "Ana", utc(2024, 1, 1, 13, 0), utc(2024, 1, 1, 14, 0), "Router swap"),
            OvertimeRecord(2, "Ana", utc(2024, 1, 2, 13, 0), utc(2024, 1, 2, 15, 15), ""),
            OvertimeRecord(3, "Bruno", utc(2024, 1, 1, 20, 0), utc(2024, 1, 1, 22, 30), "Fiber repair"),
        ]
    )


@pytest.fixture
def preferences():
    return InMemoryPreferenceStore()


@pytest.fixture
def lifecycle(store, preferences):
    return OvertimeLifecycleService(
        store,
        validator=RecordValidator(roster=ROSTER, enforce_roster=True),
        guard=BulkDeleteGuard("23"),
        transformer=ExportTransformer(get_zone("America/Guayaquil")),
        preferences=preferences,
        clock=lambda: NOW,
    )
