from __future__ import annotations

from contextlib import contextmanager, suppress
from typing import Any, Dict, Optional

import mysql.connector

from ..core.exceptions import StorageError
from .connection import DatabaseConnection


@contextmanager
def db_cursor(conn_factory: DatabaseConnection, *, dictionary: bool = True):
    """Yield (conn, cursor) inside one transaction.

    Commits on success, rolls back on error. Driver errors (including connect
    timeouts) surface as StorageError.
    """

    try:
        conn = conn_factory.connect()
    except mysql.connector.Error as e:
        raise StorageError(f"Cannot reach attendance store: {e}") from e

    try:
        cur = conn.cursor(dictionary=dictionary)
        try:
            yield conn, cur
            conn.commit()
        finally:
            cur.close()
    except mysql.connector.Error as e:
        with suppress(mysql.connector.Error):
            conn.rollback()
        raise StorageError(f"Attendance store error: {e}") from e
    except Exception:
        with suppress(mysql.connector.Error):
            conn.rollback()
        raise
    finally:
        with suppress(mysql.connector.Error):
            conn.close()


def fetchone(cur) -> Optional[Dict[str, Any]]:
    row = cur.fetchone()
    return row if row else None
