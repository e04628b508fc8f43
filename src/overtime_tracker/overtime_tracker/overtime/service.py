from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import Callable, Iterable, Optional

from ..common.datetime_utils import now_utc
from ..core.constants import DEFAULT_SESSION_HOURS, LAST_TECHNICIAN_KEY
from ..core.enums import ErrorKind, SubmissionMode
from ..core.exceptions import (
    DeleteFailedError,
    GuardDeniedError,
    LoadFailedError,
    SaveFailedError,
    ValidationError,
)
from ..export.model import ExportTable
from ..export.transformer import ExportTransformer
from ..preferences.repository import PreferenceStore
from .duration import Duration, aggregate
from .guard import BulkDeleteGuard
from .model import OvertimeRecord, PendingFields
from .repository import RecordStore
from .validator import RecordValidator

logger = logging.getLogger(__name__)


@dataclass
class LifecycleState:
    selected_technician: Optional[str] = None
    editing_id: Optional[int] = None
    editing_technician: Optional[str] = None
    pending: PendingFields = field(default_factory=PendingFields)
    records: list[OvertimeRecord] = field(default_factory=list)
    total: Duration = field(default_factory=Duration.zero)
    last_error: Optional[ErrorKind] = None

    @property
    def mode(self) -> SubmissionMode:
        return SubmissionMode.UPDATE if self.editing_id is not None else SubmissionMode.CREATE


class OvertimeLifecycleService:
    """Use case: keep one technician's overtime records and their total in sync with the store.

    Every public operation runs under one lock, so a store call never overlaps
    another one and the reload after a mutation always follows its acknowledgment.
    Validation errors and guard refusals never reach the store.
    """

    def __init__(
        self,
        store: RecordStore,
        *,
        validator: RecordValidator,
        guard: BulkDeleteGuard,
        transformer: ExportTransformer,
        preferences: Optional[PreferenceStore] = None,
        clock: Callable[[], datetime] = now_utc,
        session_hours: int = DEFAULT_SESSION_HOURS,
        lock: Optional[threading.RLock] = None,
    ):
        self._store = store
        self._validator = validator
        self._guard = guard
        self._transformer = transformer
        self._preferences = preferences
        self._clock = clock
        self._session_hours = int(session_hours)
        self._lock = lock if lock is not None else threading.RLock()
        self.state = LifecycleState()
        self.state.pending = self.default_pending()

    @property
    def records(self) -> list[OvertimeRecord]:
        return list(self.state.records)

    @property
    def total(self) -> Duration:
        return self.state.total

    def default_pending(self) -> PendingFields:
        now = self._clock()
        return PendingFields(
            technician_name=self.state.selected_technician,
            start_time=now - timedelta(hours=self._session_hours),
            end_time=now,
            work_description="",
        )

    def find_record(self, record_id: int) -> Optional[OvertimeRecord]:
        for r in self.state.records:
            if r.record_id == record_id:
                return r
        return None

    # --- selection / loading ---

    def select_technician(self, name: Optional[str]) -> list[OvertimeRecord]:
        """Select a technician and load their records; a failed load yields an empty set."""
        with self._lock:
            self.state.last_error = None
            name = (name or "").strip() or None

            if name != self.state.selected_technician and self.state.editing_id is not None:
                self._clear_edit()
            self.state.selected_technician = name
            self.state.pending = self.state.pending.with_technician(name)

            if name is None:
                self.load_result([])
                return []

            self._remember(name)
            return self._reload()

    def restore_selection(self, *, load: bool = True) -> list[OvertimeRecord]:
        """Re-select the technician remembered from a previous session, if any.

        With ``load=False`` only the selection is restored; callers about to
        mutate the store skip the read since the mutation reloads anyway.
        """
        with self._lock:
            name = self._recall()
            if not name:
                return self.records
            self.state.selected_technician = name
            self.state.pending = self.state.pending.with_technician(name)
            if not load:
                return self.records
            self.state.last_error = None
            return self._reload()

    def refresh(self) -> list[OvertimeRecord]:
        with self._lock:
            if not self.state.selected_technician:
                return []
            return self._reload()

    def load_result(self, records: Iterable[OvertimeRecord]) -> None:
        with self._lock:
            self.state.records = list(records)
            self.state.total = aggregate(self.state.records)

    # --- create / edit ---

    def begin_edit(self, record: OvertimeRecord) -> PendingFields:
        with self._lock:
            self.state.editing_id = record.record_id
            self.state.editing_technician = record.technician_name
            self.state.pending = PendingFields.from_record(record)
            return self.state.pending

    def resume_edit(self, record_id: int, technician_name: str) -> None:
        """Continue an edit started earlier without re-reading the record."""
        with self._lock:
            self.state.editing_id = int(record_id)
            self.state.editing_technician = technician_name

    def cancel_edit(self) -> None:
        with self._lock:
            self._clear_edit()

    def submit(self, pending: Optional[PendingFields] = None) -> int:
        """Create a record, or overwrite the one being edited.

        Returns the id of the saved record. On failure the pending fields are kept.
        """
        with self._lock:
            self.state.last_error = None
            pending = pending or self.state.pending
            editing_id = self.state.editing_id

            if editing_id is not None:
                # Technician never changes after creation.
                pending = pending.with_technician(self.state.editing_technician)
            elif not pending.technician_name:
                pending = pending.with_technician(self.state.selected_technician)
            self.state.pending = pending

            try:
                draft = self._validator.validate(pending)
            except ValidationError as e:
                self.state.last_error = e.kind
                raise

            try:
                if editing_id is not None:
                    saved = self._store.update_by_id(editing_id, draft)
                    record_id = editing_id
                else:
                    record_id = self._store.create(draft)
                    saved = True
            except Exception as exc:
                logger.exception("Saving overtime record failed (editing_id=%s)", editing_id)
                self.state.last_error = ErrorKind.SAVE_FAILED
                raise SaveFailedError(f"Could not save record: {exc}") from exc

            if not saved:
                self.state.last_error = ErrorKind.SAVE_FAILED
                raise SaveFailedError(f"Record {editing_id} no longer exists")

            logger.info(
                "%s overtime record %s for %s",
                "Updated" if editing_id is not None else "Created",
                record_id,
                draft.technician_name,
            )
            self._clear_edit()
            self.refresh()
            return record_id

    # --- deletion ---

    def delete_one(self, record_id: int) -> None:
        with self._lock:
            self.state.last_error = None
            try:
                deleted = self._store.delete_by_id(record_id)
            except Exception as exc:
                logger.exception("Deleting overtime record %s failed", record_id)
                self.state.last_error = ErrorKind.DELETE_FAILED
                raise DeleteFailedError(f"Could not delete record {record_id}: {exc}") from exc

            if not deleted:
                self.state.last_error = ErrorKind.DELETE_FAILED
                raise DeleteFailedError(f"Record {record_id} not found")

            logger.info("Deleted overtime record %s", record_id)
            if self.state.editing_id == record_id:
                self._clear_edit()
            self.refresh()

    def delete_all(self, token: Optional[str]) -> int:
        """Delete every record of every technician once the confirmation code matches."""
        with self._lock:
            self.state.last_error = None
            try:
                authorization = self._guard.authorize(token)
            except GuardDeniedError as e:
                self.state.last_error = e.kind
                raise

            authorization.spend()
            try:
                removed = self._store.delete_all()
            except Exception as exc:
                logger.exception("Deleting all overtime records failed")
                self.state.last_error = ErrorKind.DELETE_FAILED
                raise DeleteFailedError(f"Could not delete records: {exc}") from exc

            logger.warning("Deleted all overtime records (%s rows)", removed)
            self._clear_edit()
            self.load_result([])
            return removed

    # --- export ---

    def export_all(self) -> ExportTable:
        with self._lock:
            self.state.last_error = None
            try:
                records = self._store.list_all()
            except Exception as exc:
                logger.exception("Loading records for export failed")
                self.state.last_error = ErrorKind.LOAD_FAILED
                raise LoadFailedError(f"Could not load records: {exc}") from exc
            return self._transformer.transform(records)

    # --- internals ---

    def _reload(self) -> list[OvertimeRecord]:
        name = self.state.selected_technician
        try:
            records = self._store.list_by_technician(name)
        except Exception:
            logger.exception("Loading overtime records for %s failed", name)
            self.state.last_error = ErrorKind.LOAD_FAILED
            records = []
        self.load_result(records)
        return self.records

    def _clear_edit(self) -> None:
        self.state.editing_id = None
        self.state.editing_technician = None
        self.state.pending = self.default_pending()

    def _remember(self, name: str) -> None:
        if self._preferences is None:
            return
        try:
            self._preferences.set(LAST_TECHNICIAN_KEY, name)
        except Exception:
            logger.warning("Could not remember last technician", exc_info=True)

    def _recall(self) -> Optional[str]:
        if self._preferences is None:
            return None
        try:
            return self._preferences.get(LAST_TECHNICIAN_KEY)
        except Exception:
            logger.warning("Could not read last technician", exc_info=True)
            return None
