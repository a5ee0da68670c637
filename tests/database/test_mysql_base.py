from __future__ import annotations

from datetime import date, datetime

import pytest
from mysql.connector import errorcode
from mysql.connector.errors import IntegrityError

from worklog_tracker.core.enums import WorkLogStatus
from worklog_tracker.core.exceptions import DuplicateKeyError
from worklog_tracker.database.mysql_base import db_cursor
from worklog_tracker.worklogs.model import NewWorkLog
from worklog_tracker.worklogs.mysql_worklog_repository import MySQLWorkLogRepository


class StubCursor:
    def __init__(self, fail_on: int | None = None, error: Exception | None = None):
        self.executed = []
        self.closed = False
        self._fail_on = fail_on
        self._error = error

    def execute(self, sql, params=None):
        self.executed.append(params)
        if self._fail_on is not None and len(self.executed) == self._fail_on:
            raise self._error

    def close(self):
        self.closed = True


class StubConnection:
    def __init__(self, cursor: StubCursor):
        self._cursor = cursor
        self.commits = 0
        self.rollbacks = 0
        self.closed = False

    def cursor(self, dictionary=False):
        return self._cursor

    def commit(self):
        self.commits += 1

    def rollback(self):
        self.rollbacks += 1

    def close(self):
        self.closed = True


class StubFactory:
    def __init__(self, conn: StubConnection):
        self.conn = conn

    def connect(self, *, with_database: bool = True):
        return self.conn


def _week_off(day: int) -> NewWorkLog:
    start = datetime(2024, 6, day, 9, 0)
    return NewWorkLog(
        user_id=1,
        work_date=date(2024, 6, day),
        start_time=start,
        end_time=start,
        duration=0,
        status=WorkLogStatus.WEEK_OFF,
    )


def _insert_rows(factory, rows):
    with db_cursor(factory) as (_, cur):
        for row in rows:
            cur.execute("INSERT INTO work_logs VALUES (%s)", (row,))


def test_clean_block_commits_once():
    conn = StubConnection(StubCursor())

    _insert_rows(StubFactory(conn), [1, 2, 3])

    assert conn.commits == 1
    assert conn.rollbacks == 0
    assert conn.closed


def test_duplicate_entry_in_week_off_batch_rolls_back_every_row():
    dup = IntegrityError(msg="Duplicate entry", errno=errorcode.ER_DUP_ENTRY)
    cursor = StubCursor(fail_on=2, error=dup)
    conn = StubConnection(cursor)

    logs = [_week_off(day) for day in (3, 4, 5)]

    with pytest.raises(DuplicateKeyError):
        MySQLWorkLogRepository(StubFactory(conn)).create_many(logs)

    assert conn.rollbacks == 1
    assert conn.commits == 0
    assert cursor.closed
    assert conn.closed


def test_other_integrity_errors_pass_through():
    fk = IntegrityError(msg="Cannot add or update a child row", errno=errorcode.ER_NO_REFERENCED_ROW_2)
    conn = StubConnection(StubCursor(fail_on=1, error=fk))

    with pytest.raises(IntegrityError):
        _insert_rows(StubFactory(conn), [1])

    assert conn.rollbacks == 1
    assert conn.commits == 0


def test_unexpected_error_rolls_back():
    conn = StubConnection(StubCursor(fail_on=1, error=RuntimeError("boom")))

    with pytest.raises(RuntimeError):
        _insert_rows(StubFactory(conn), [1])

    assert conn.rollbacks == 1
    assert conn.commits == 0


def test_week_off_batch_commits_once():
    cursor = StubCursor()
    conn = StubConnection(cursor)

    created = MySQLWorkLogRepository(StubFactory(conn)).create_many([_week_off(day) for day in (3, 4, 5)])

    assert created == 3
    assert len(cursor.executed) == 3
    assert conn.commits == 1
