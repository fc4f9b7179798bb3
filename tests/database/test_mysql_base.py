from __future__ import annotations

import mysql.connector
import pytest
from mysql.connector import errorcode

from student_attendance.core.exceptions import ConflictError, TransientIOError, ValidationError
from student_attendance.database.mysql_base import UNKNOWN_REFERENCE_MESSAGE, db_cursor, translate_error


class FakeCursor:
    def __init__(self):
        self.closed = False

    def close(self):
        self.closed = True


class FakeConnection:
    def __init__(self):
        self.cur = FakeCursor()
        self.commits = 0
        self.rollbacks = 0
        self.closed = False

    def cursor(self, dictionary=True):
        return self.cur

    def commit(self):
        self.commits += 1

    def rollback(self):
        self.rollbacks += 1

    def close(self):
        self.closed = True


class FakeConnectionFactory:
    def __init__(self, conn=None, error=None):
        self._conn = conn
        self._error = error

    def connect(self):
        if self._error is not None:
            raise self._error
        return self._conn


def test_duplicate_key_is_a_conflict():
    err = mysql.connector.errors.IntegrityError(msg="Duplicate entry", errno=errorcode.ER_DUP_ENTRY)

    assert isinstance(translate_error(err), ConflictError)


@pytest.mark.parametrize("errno", [errorcode.ER_NO_REFERENCED_ROW_2, errorcode.ER_NO_REFERENCED_ROW])
def test_missing_foreign_key_is_a_validation_error(errno):
    err = mysql.connector.errors.IntegrityError(msg="Cannot add or update a child row", errno=errno)

    translated = translate_error(err)

    assert isinstance(translated, ValidationError)
    assert str(translated) == UNKNOWN_REFERENCE_MESSAGE


def test_other_driver_errors_are_transient():
    err = mysql.connector.errors.OperationalError(msg="Lost connection", errno=errorcode.CR_SERVER_LOST)

    assert isinstance(translate_error(err), TransientIOError)


def test_db_cursor_commits_once():
    conn = FakeConnection()

    with db_cursor(FakeConnectionFactory(conn)) as (c, cur):
        assert c is conn

    assert (conn.commits, conn.rollbacks) == (1, 0)
    assert conn.cur.closed and conn.closed


def test_db_cursor_rolls_back_and_translates_driver_errors():
    conn = FakeConnection()

    with pytest.raises(ConflictError):
        with db_cursor(FakeConnectionFactory(conn)):
            raise mysql.connector.errors.IntegrityError(msg="Duplicate entry", errno=errorcode.ER_DUP_ENTRY)

    assert (conn.commits, conn.rollbacks) == (0, 1)
    assert conn.closed


def test_db_cursor_rolls_back_on_other_errors():
    conn = FakeConnection()

    with pytest.raises(KeyError):
        with db_cursor(FakeConnectionFactory(conn)):
            raise KeyError("student_id")

    assert (conn.commits, conn.rollbacks) == (0, 1)


def test_db_cursor_connect_failure_is_transient():
    factory = FakeConnectionFactory(error=mysql.connector.errors.InterfaceError(msg="refused", errno=2003))

    with pytest.raises(TransientIOError):
        with db_cursor(factory):
            pass
