from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

from overtime_tracker.core.constants import LAST_TECHNICIAN_KEY
from overtime_tracker.core.enums import ErrorKind, SubmissionMode
from overtime_tracker.core.exceptions import (
    DeleteFailedError,
    GuardDeniedError,
    InvalidTimeRangeError,
    LoadFailedError,
    SaveFailedError,
)
from overtime_tracker.overtime.model import PendingFields

NOW = datetime(2024, 1, 1, 15, 0, tzinfo=timezone.utc)


def utc(*args) -> datetime:
    return datetime(*args, tzinfo=timezone.utc)


def _pending(technician="Ana", start=None, end=None, description="Cable run"):
    return PendingFields(
        technician_name=technician,
        start_time=start or utc(2024, 1, 3, 13, 0),
        end_time=end or utc(2024, 1, 3, 14, 30),
        work_description=description,
    )


def test_select_loads_records_and_total(lifecycle, preferences):
    records = lifecycle.select_technician("Ana")

    assert [r.record_id for r in records] == [2, 1]
    assert str(lifecycle.total) == "03:15"
    assert lifecycle.state.last_error is None
    assert preferences.get(LAST_TECHNICIAN_KEY) == "Ana"


def test_select_load_failure_yields_empty_set(lifecycle, store):
    store.fail_on.add("list_by_technician")

    records = lifecycle.select_technician("Ana")

    assert records == []
    assert str(lifecycle.total) == "00:00"
    assert lifecycle.state.last_error == ErrorKind.LOAD_FAILED


def test_clearing_selection_empties_records(lifecycle, store):
    lifecycle.select_technician("Ana")
    store.calls.clear()

    assert lifecycle.select_technician("") == []
    assert store.calls == []
    assert lifecycle.state.selected_technician is None


def test_restore_selection_from_preferences(lifecycle, preferences):
    preferences.set(LAST_TECHNICIAN_KEY, "Bruno")

    records = lifecycle.restore_selection()

    assert lifecycle.state.selected_technician == "Bruno"
    assert str(lifecycle.total) == "02:30"
    assert len(records) == 1


def test_restore_selection_without_load_skips_store(lifecycle, preferences, store):
    preferences.set(LAST_TECHNICIAN_KEY, "Bruno")

    assert lifecycle.restore_selection(load=False) == []
    assert lifecycle.state.selected_technician == "Bruno"
    assert lifecycle.state.pending.technician_name == "Bruno"
    assert store.calls == []


def test_broken_preference_store_does_not_block(lifecycle):
    class Broken:
        def get(self, key):
            raise OSError("boom")

        def set(self, key, value):
            raise OSError("boom")

    lifecycle._preferences = Broken()
    assert lifecycle.restore_selection() == []
    assert len(lifecycle.select_technician("Ana")) == 2


def test_default_pending_is_last_two_hours(lifecycle):
    pending = lifecycle.state.pending
    assert pending.end_time == NOW
    assert pending.start_time == NOW - timedelta(hours=2)
    assert pending.work_description == ""


def test_submit_creates_and_reloads(lifecycle, store):
    lifecycle.select_technician("Ana")
    store.calls.clear()

    record_id = lifecycle.submit(_pending())

    assert store.calls == ["create", "list_by_technician"]
    assert store.get(record_id).work_description == "Cable run"
    assert len(lifecycle.records) == 3
    assert str(lifecycle.total) == "04:45"
    assert lifecycle.state.pending.start_time == NOW - timedelta(hours=2)
    assert lifecycle.state.pending.technician_name == "Ana"


def test_submit_uses_selected_technician_when_missing(lifecycle, store):
    lifecycle.select_technician("Carla")

    record_id = lifecycle.submit(_pending(technician=None))

    assert store.get(record_id).technician_name == "Carla"


def test_invalid_submit_makes_no_store_call(lifecycle, store):
    lifecycle.select_technician("Ana")
    store.calls.clear()
    bad = _pending(start=utc(2024, 1, 1, 10, 0), end=utc(2024, 1, 1, 9, 0))

    with pytest.raises(InvalidTimeRangeError):
        lifecycle.submit(bad)

    assert store.calls == []
    assert lifecycle.state.last_error == ErrorKind.INVALID_TIME_RANGE
    assert lifecycle.state.pending == bad


def test_save_failure_keeps_pending_fields(lifecycle, store):
    lifecycle.select_technician("Ana")
    store.fail_on.add("create")
    pending = _pending(description="Keep me")

    with pytest.raises(SaveFailedError):
        lifecycle.submit(pending)

    assert lifecycle.state.pending == pending
    assert lifecycle.state.last_error == ErrorKind.SAVE_FAILED
    assert str(lifecycle.total) == "03:15"


def test_submit_while_editing_updates_and_keeps_id_and_technician(lifecycle, store):
    lifecycle.select_technician("Ana")
    record = lifecycle.find_record(1)
    lifecycle.begin_edit(record)
    assert lifecycle.state.mode == SubmissionMode.UPDATE
    store.calls.clear()

    edited = _pending(technician="Bruno", start=utc(2024, 1, 1, 12, 0), end=utc(2024, 1, 1, 14, 0), description="Longer")
    saved_id = lifecycle.submit(edited)

    assert saved_id == 1
    assert "create" not in store.calls
    assert store.calls[0] == "update_by_id"
    updated = store.get(1)
    assert updated.technician_name == "Ana"
    assert updated.work_description == "Longer"
    assert lifecycle.state.editing_id is None
    assert lifecycle.state.mode == SubmissionMode.CREATE
    assert str(lifecycle.total) == "04:15"


def test_begin_edit_seeds_pending_fields(lifecycle):
    lifecycle.select_technician("Ana")
    record = lifecycle.find_record(2)

    pending = lifecycle.begin_edit(record)

    assert lifecycle.state.editing_id == 2
    assert pending.start_time == record.start_time
    assert pending.end_time == record.end_time


def test_update_of_vanished_record_is_save_failure(lifecycle, store):
    lifecycle.select_technician("Ana")
    lifecycle.begin_edit(lifecycle.find_record(1))
    store.delete_by_id(1)

    with pytest.raises(SaveFailedError):
        lifecycle.submit(_pending())

    assert lifecycle.state.editing_id == 1


def test_delete_one_reloads(lifecycle, store):
    lifecycle.select_technician("Ana")

    lifecycle.delete_one(1)

    assert [r.record_id for r in lifecycle.records] == [2]
    assert str(lifecycle.total) == "02:15"


def test_delete_one_failure_leaves_record(lifecycle, store):
    lifecycle.select_technician("Ana")
    store.fail_on.add("delete_by_id")

    with pytest.raises(DeleteFailedError):
        lifecycle.delete_one(1)

    assert len(lifecycle.records) == 2
    assert lifecycle.state.last_error == ErrorKind.DELETE_FAILED


def test_delete_all_with_wrong_code_makes_no_store_call(lifecycle, store):
    lifecycle.select_technician("Ana")
    store.calls.clear()

    with pytest.raises(GuardDeniedError):
        lifecycle.delete_all("22")

    assert store.calls == []
    assert len(lifecycle.records) == 2
    assert lifecycle.state.last_error == ErrorKind.GUARD_DENIED


def test_delete_all_with_code_clears_everything(lifecycle, store):
    lifecycle.select_technician("Ana")
    lifecycle.begin_edit(lifecycle.find_record(1))

    removed = lifecycle.delete_all("23")

    assert removed == 3
    assert store.calls[-1] == "delete_all"
    assert lifecycle.records == []
    assert str(lifecycle.total) == "00:00"
    assert lifecycle.state.editing_id is None


def test_delete_all_failure(lifecycle, store):
    lifecycle.select_technician("Ana")
    store.fail_on.add("delete_all")

    with pytest.raises(DeleteFailedError):
        lifecycle.delete_all("23")

    assert len(lifecycle.records) == 2


def test_export_all_covers_every_technician(lifecycle):
    table = lifecycle.export_all()

    assert len(table) == 3
    assert [r.technician for r in table.rows] == ["Ana", "Ana", "Bruno"]


def test_export_load_failure(lifecycle, store):
    store.fail_on.add("list_all")

    with pytest.raises(LoadFailedError):
        lifecycle.export_all()


def test_resume_edit_updates_without_reading_first(lifecycle, store):
    lifecycle.resume_edit(3, "Bruno")

    saved_id = lifecycle.submit(
        _pending(technician="Ana", start=utc(2024, 1, 1, 20, 0), end=utc(2024, 1, 1, 21, 0), description="Short")
    )

    assert saved_id == 3
    assert store.calls[0] == "update_by_id"
    assert store.get(3).technician_name == "Bruno"
