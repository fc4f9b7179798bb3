from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Any, Dict, List, Optional

import mysql.connector
from mysql.connector import errorcode

from ..core.exceptions import ConflictError, TransientIOError, ValidationError
from .connection import DatabaseConnection

logger = logging.getLogger(__name__)

UNKNOWN_REFERENCE_MESSAGE = "Unknown student or subject"

_MISSING_REFERENCE = frozenset({errorcode.ER_NO_REFERENCED_ROW, errorcode.ER_NO_REFERENCED_ROW_2})


def translate_error(exc: mysql.connector.Error) -> Exception:
    """Map driver errors onto domain errors.

    Duplicate keys become ConflictError and foreign-key misses become
    ValidationError. Everything else is treated as a failure to reach or use
    the database.
    """

    errno = getattr(exc, "errno", None)
    if errno == errorcode.ER_DUP_ENTRY:
        return ConflictError(str(exc))
    if errno in _MISSING_REFERENCE:
        return ValidationError(UNKNOWN_REFERENCE_MESSAGE)
    return TransientIOError(str(exc))


@contextmanager
def db_cursor(conn_factory: DatabaseConnection, *, dictionary: bool = True):
    """Yield (conn, cursor) inside one transaction.

    Everything executed in the block commits together; any error rolls the
    whole block back.
    """

    try:
        conn = conn_factory.connect()
    except mysql.connector.Error as e:
        logger.error("database connection failed: %s", e)
        raise TransientIOError(str(e)) from e

    try:
        cur = conn.cursor(dictionary=dictionary)
        try:
            yield conn, cur
            conn.commit()
        finally:
            cur.close()
    except mysql.connector.Error as e:
        conn.rollback()
        raise translate_error(e) from e
    except Exception:
        conn.rollback()
        raise
    finally:
        conn.close()


def fetchone(cur) -> Optional[Dict[str, Any]]:
    row = cur.fetchone()
    return row if row else None


def fetchall(cur) -> List[Dict[str, Any]]:
    rows = cur.fetchall()
    return list(rows or [])
