from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Any, Dict, List, Optional

import mysql.connector
from mysql.connector import errorcode

from ..core.exceptions import ConstraintViolation, StorageError
from .connection import DatabaseConnection

logger = logging.getLogger(__name__)


@contextmanager
def db_cursor(conn_factory: DatabaseConnection, *, dictionary: bool = True):
    conn = conn_factory.connect()
    try:
        cur = conn.cursor(dictionary=dictionary)
        try:
            yield conn, cur
            conn.commit()
        finally:
            cur.close()
    except Exception:
        try:
            conn.rollback()
        except mysql.connector.Error:
            logger.warning("Rollback failed on a broken connection", exc_info=True)
        raise
    finally:
        try:
            conn.close()
        finally:
            conn_factory.release()


@contextmanager
def storage_errors(operation: str):
    """Translate connector errors into the storage exceptions services understand."""
    try:
        yield
    except mysql.connector.IntegrityError as exc:
        if exc.errno == errorcode.ER_DUP_ENTRY:
            raise ConstraintViolation(str(exc)) from exc
        raise StorageError(f"{operation}: {exc}") from exc
    except mysql.connector.Error as exc:
        raise StorageError(f"{operation}: {exc}") from exc


def fetchone(cur) -> Optional[Dict[str, Any]]:
    row = cur.fetchone()
    return row if row else None


def fetchall(cur) -> List[Dict[str, Any]]:
    rows = cur.fetchall()
    return list(rows or [])
