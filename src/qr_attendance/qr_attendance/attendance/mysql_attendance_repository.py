from __future__ import annotations

from datetime import date
from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, from_db_utc, to_db_utc
from .model import AttendanceRecord
from .repository import AttendanceRepository

_COLUMNS = "user_id, work_date, recorded_at, qr_code"


def _row_to_record(r: dict) -> AttendanceRecord:
    return AttendanceRecord(
        user_id=int(r["user_id"]),
        date=r["work_date"],
        timestamp=from_db_utc(r["recorded_at"]),
        qr_code=r["qr_code"],
    )


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_for_user_and_date(self, user_id: int, work_date: date) -> Optional[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM attendance_records
                WHERE user_id=%s AND work_date=%s
                """,
                (int(user_id), work_date),
            )
            r = fetchone(cur)
            return _row_to_record(r) if r else None

    def create_if_absent(self, record: AttendanceRecord) -> None:
        # PRIMARY KEY (user_id, work_date) rejects the second insert;
        # db_cursor turns ER_DUP_ENTRY into DuplicateRecordError.
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO attendance_records(user_id, work_date, recorded_at, qr_code)
                VALUES(%s,%s,%s,%s)
                """,
                (int(record.user_id), record.date, to_db_utc(record.timestamp), record.qr_code),
            )

    def list_for_user(self, user_id: int, start_date: date, end_date: date) -> Sequence[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM attendance_records
                WHERE user_id=%s AND work_date BETWEEN %s AND %s
                ORDER BY work_date DESC
                """,
                (int(user_id), start_date, end_date),
            )
            return [_row_to_record(r) for r in fetchall(cur)]

    def list_for_date(self, work_date: date) -> Sequence[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM attendance_records
                WHERE work_date=%s
                ORDER BY recorded_at ASC
                """,
                (work_date,),
            )
            return [_row_to_record(r) for r in fetchall(cur)]

    def list_between(self, start_date: date, end_date: date) -> Sequence[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM attendance_records
                WHERE work_date BETWEEN %s AND %s
                ORDER BY work_date DESC, recorded_at ASC
                """,
                (start_date, end_date),
            )
            return [_row_to_record(r) for r in fetchall(cur)]
