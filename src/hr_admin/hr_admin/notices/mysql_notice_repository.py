from __future__ import annotations

from datetime import date
from typing import Optional, Sequence

from ..core.enums import NoticeStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import Notice
from .repository import NoticeRepository


def _to_notice(r: dict) -> Notice:
    return Notice(
        notice_id=int(r["notice_id"]),
        date=r["notice_date"],
        subject=r["subject"],
        paragraph=r["paragraph"],
        status=NoticeStatus(r["status"]),
    )


class MySQLNoticeRepository(NoticeRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def create(self, *, notice_date: date, subject: str, paragraph: str) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "INSERT INTO notices(notice_date, subject, paragraph, status) VALUES(%s,%s,%s,%s)",
                (notice_date, subject, paragraph, NoticeStatus.UNREAD.value),
            )
            return int(cur.lastrowid)

    def get(self, *, notice_id: int) -> Optional[Notice]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT notice_id, notice_date, subject, paragraph, status FROM notices WHERE notice_id=%s",
                (int(notice_id),),
            )
            r = fetchone(cur)
            return _to_notice(r) if r else None

    def list_notices(self) -> Sequence[Notice]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT notice_id, notice_date, subject, paragraph, status
                FROM notices
                ORDER BY notice_date DESC, notice_id DESC
                """
            )
            return [_to_notice(r) for r in fetchall(cur)]

    def mark_read(self, *, notice_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE notices SET status=%s WHERE notice_id=%s",
                (NoticeStatus.READ.value, int(notice_id)),
            )
            return cur.rowcount > 0
