from __future__ import annotations

import threading
from dataclasses import dataclass, field
from typing import Optional, Sequence
from zoneinfo import ZoneInfo

from .common.datetime_utils import get_zone
from .core.constants import (
    DEFAULT_BULK_DELETE_CODE,
    DEFAULT_DISPLAY_TIMEZONE,
    DEFAULT_TECHNICIANS,
    MAX_DESCRIPTION_LENGTH,
)
from .database.connection import DBConfig, DatabaseConnection
from .export.excel_exporter import ExcelTabularExporter
from .export.exporter import TabularExporter
from .export.transformer import ExportTransformer
from .overtime.guard import BulkDeleteGuard
from .overtime.mysql_overtime_repository import MySQLOvertimeRepository
from .overtime.repository import RecordStore
from .overtime.service import OvertimeLifecycleService
from .overtime.validator import RecordValidator
from .preferences.repository import PreferenceStore


@dataclass(frozen=True)
class Container:
    records_repo: RecordStore

    technicians: tuple[str, ...]
    display_tz: ZoneInfo
    validator: RecordValidator
    guard: BulkDeleteGuard
    transformer: ExportTransformer
    exporter: TabularExporter
    # Shared by every lifecycle so store calls never overlap across requests.
    lock: threading.RLock = field(default_factory=threading.RLock)

    def new_lifecycle(self, preferences: Optional[PreferenceStore] = None) -> OvertimeLifecycleService:
        """One lifecycle per caller; it holds that caller's selection and edit state."""
        return OvertimeLifecycleService(
            self.records_repo,
            validator=self.validator,
            guard=self.guard,
            transformer=self.transformer,
            preferences=preferences,
            lock=self.lock,
        )


def build_container(
    *,
    db_config: Optional[dict] = None,
    records_repo: Optional[RecordStore] = None,
    technicians: Sequence[str] = DEFAULT_TECHNICIANS,
    enforce_roster: bool = True,
    require_description: bool = False,
    bulk_delete_code: str = DEFAULT_BULK_DELETE_CODE,
    display_timezone: str = DEFAULT_DISPLAY_TIMEZONE,
) -> Container:
    if records_repo is None:
        if db_config is None:
            raise ValueError("db_config is required when no records_repo is given")
        conn = DatabaseConnection(DBConfig.from_dict(db_config))
        records_repo = MySQLOvertimeRepository(conn)

    roster = tuple(technicians)
    display_tz = get_zone(display_timezone)

    return Container(
        records_repo=records_repo,
        technicians=roster,
        display_tz=display_tz,
        validator=RecordValidator(
            roster=roster,
            enforce_roster=enforce_roster,
            require_description=require_description,
            max_description_length=MAX_DESCRIPTION_LENGTH,
        ),
        guard=BulkDeleteGuard(bulk_delete_code),
        transformer=ExportTransformer(display_tz),
        exporter=ExcelTabularExporter(),
    )
