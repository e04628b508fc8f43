from __future__ import annotations

from typing import Any, Dict, Sequence

from ..common.datetime_utils import from_storage, to_storage
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall
from .model import OvertimeRecord, RecordDraft
from .repository import RecordStore

_COLUMNS = "record_id, technician_name, start_time, end_time, work_description"


def _to_record(r: Dict[str, Any]) -> OvertimeRecord:
    return OvertimeRecord(
        record_id=int(r["record_id"]),
        technician_name=r["technician_name"],
        start_time=from_storage(r["start_time"]),
        end_time=from_storage(r["end_time"]),
        work_description=r.get("work_description") or "",
    )


class MySQLOvertimeRepository(RecordStore):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_by_technician(self, technician_name: str) -> Sequence[OvertimeRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM overtime_records
                WHERE technician_name=%s
                ORDER BY start_time DESC, record_id DESC
                """,
                (technician_name,),
            )
            return [_to_record(r) for r in fetchall(cur)]

    def list_all(self) -> Sequence[OvertimeRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM overtime_records ORDER BY record_id ASC")
            return [_to_record(r) for r in fetchall(cur)]

    def create(self, draft: RecordDraft) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO overtime_records(technician_name, start_time, end_time, work_description)
                VALUES(%s,%s,%s,%s)
                """,
                (
                    draft.technician_name,
                    to_storage(draft.start_time),
                    to_storage(draft.end_time),
                    draft.work_description,
                ),
            )
            return int(cur.lastrowid)

    def update_by_id(self, record_id: int, draft: RecordDraft) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE overtime_records
                SET technician_name=%s, start_time=%s, end_time=%s, work_description=%s
                WHERE record_id=%s
                """,
                (
                    draft.technician_name,
                    to_storage(draft.start_time),
                    to_storage(draft.end_time),
                    draft.work_description,
                    int(record_id),
                ),
            )
            return cur.rowcount > 0

    def delete_by_id(self, record_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM overtime_records WHERE record_id=%s", (int(record_id),))
            return cur.rowcount > 0

    def delete_all(self) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM overtime_records")
            return int(cur.rowcount)
