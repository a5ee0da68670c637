from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Sequence

from ..core.enums import WorkLogStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import DailyLogRow, NewWorkLog, WorkLog
from .repository import WorkLogRepository

_COLUMNS = "log_id, user_id, work_date, start_time, end_time, duration, status"

_INSERT = """
    INSERT INTO work_logs(user_id, work_date, start_time, end_time, duration, status)
    VALUES(%s,%s,%s,%s,%s,%s)
"""


def _to_log(r: dict) -> WorkLog:
    return WorkLog(
        log_id=int(r["log_id"]),
        user_id=int(r["user_id"]),
        work_date=r["work_date"],
        start_time=r["start_time"],
        end_time=r.get("end_time"),
        duration=None if r.get("duration") is None else int(r["duration"]),
        status=WorkLogStatus(r["status"]),
    )


def _insert_params(log: NewWorkLog) -> tuple:
    return (log.user_id, log.work_date, log.start_time, log.end_time, log.duration, log.status.value)


class MySQLWorkLogRepository(WorkLogRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_for_user_and_date(self, user_id: int, work_date: date) -> Optional[WorkLog]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM work_logs WHERE user_id=%s AND work_date=%s",
                (int(user_id), work_date),
            )
            r = fetchone(cur)
            return _to_log(r) if r else None

    def list_for_user_in_range(self, user_id: int, start_date: date, end_date: date) -> Sequence[WorkLog]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM work_logs
                WHERE user_id=%s AND work_date BETWEEN %s AND %s
                ORDER BY work_date ASC
                """,
                (int(user_id), start_date, end_date),
            )
            return [_to_log(r) for r in fetchall(cur)]

    def list_recent_for_user(self, user_id: int, *, limit: int, offset: int = 0) -> Sequence[WorkLog]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM work_logs
                WHERE user_id=%s
                ORDER BY work_date DESC
                LIMIT %s OFFSET %s
                """,
                (int(user_id), int(limit), int(offset)),
            )
            return [_to_log(r) for r in fetchall(cur)]

    def count_for_user(self, user_id: int) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT COUNT(*) AS total FROM work_logs WHERE user_id=%s", (int(user_id),))
            r = fetchone(cur)
            return int(r["total"]) if r else 0

    def create_log(self, log: NewWorkLog) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_INSERT, _insert_params(log))
            return int(cur.lastrowid)

    def create_many(self, logs: Sequence[NewWorkLog]) -> int:
        if not logs:
            return 0
        # Single db_cursor block: one commit, rollback of every row on failure.
        with db_cursor(self._conn_factory) as (_, cur):
            for log in logs:
                cur.execute(_INSERT, _insert_params(log))
            return len(logs)

    def update_end(
        self,
        *,
        log_id: int,
        end_time: datetime,
        duration: Optional[int],
        status: WorkLogStatus,
    ) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE work_logs
                SET end_time=%s, duration=%s, status=%s
                WHERE log_id=%s AND end_time IS NULL
                """,
                (end_time, duration, status.value, int(log_id)),
            )
            return cur.rowcount > 0

    def list_in_range(self, start_date: date, end_date: date) -> Sequence[WorkLog]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM work_logs
                WHERE work_date BETWEEN %s AND %s
                ORDER BY user_id ASC, work_date ASC
                """,
                (start_date, end_date),
            )
            return [_to_log(r) for r in fetchall(cur)]

    def list_daily_rows(self, work_date: date) -> Sequence[DailyLogRow]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT
                    wl.log_id, wl.user_id, u.name AS user_name, u.email AS user_email,
                    wl.work_date, wl.start_time, wl.end_time, wl.duration, wl.status
                FROM work_logs wl
                JOIN users u ON u.user_id = wl.user_id
                WHERE wl.work_date = %s
                ORDER BY u.name ASC
                """,
                (work_date,),
            )
            return [
                DailyLogRow(
                    log_id=int(r["log_id"]),
                    user_id=int(r["user_id"]),
                    user_name=r["user_name"],
                    user_email=r["user_email"],
                    work_date=r["work_date"],
                    start_time=r["start_time"],
                    end_time=r.get("end_time"),
                    duration=None if r.get("duration") is None else int(r["duration"]),
                    status=WorkLogStatus(r["status"]),
                )
                for r in fetchall(cur)
            ]
