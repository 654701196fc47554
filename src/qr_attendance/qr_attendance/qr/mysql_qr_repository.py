from __future__ import annotations

from datetime import date
from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, from_db_utc, to_db_utc
from .model import DailyQrCode
from .repository import QrCodeRepository


def _row_to_qr(r: dict) -> DailyQrCode:
    return DailyQrCode(
        date=r["qr_date"],
        code=r["code"],
        issued_by=int(r["issued_by"]),
        issued_at=from_db_utc(r["issued_at"]),
        expires_at=from_db_utc(r["expires_at"]),
    )


class MySQLQrCodeRepository(QrCodeRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get(self, qr_date: date) -> Optional[DailyQrCode]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT qr_date, code, issued_by, issued_at, expires_at
                FROM daily_qr_codes
                WHERE qr_date=%s
                """,
                (qr_date,),
            )
            r = fetchone(cur)
            return _row_to_qr(r) if r else None

    def save(self, qr: DailyQrCode) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO daily_qr_codes(qr_date, code, issued_by, issued_at, expires_at)
                VALUES(%s,%s,%s,%s,%s)
                ON DUPLICATE KEY UPDATE
                    code=VALUES(code),
                    issued_by=VALUES(issued_by),
                    issued_at=VALUES(issued_at),
                    expires_at=VALUES(expires_at)
                """,
                (qr.date, qr.code, int(qr.issued_by), to_db_utc(qr.issued_at), to_db_utc(qr.expires_at)),
            )

    def list_recent(self, limit: int) -> Sequence[DailyQrCode]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT qr_date, code, issued_by, issued_at, expires_at
                FROM daily_qr_codes
                ORDER BY issued_at DESC
                LIMIT %s
                """,
                (int(limit),),
            )
            return [_row_to_qr(r) for r in fetchall(cur)]
