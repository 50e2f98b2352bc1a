from __future__ import annotations

import json
from contextlib import contextmanager
from datetime import datetime
from decimal import Decimal
from typing import Any, Dict, Iterator, List, Optional

from mysql.connector import errors as mysql_errors

from ..common.datetime_utils import parse_iso_datetime
from ..core.constants import MYSQL_DUPLICATE_KEY_ERRNO, MYSQL_RETRYABLE_ERRNOS
from ..core.exceptions import ConflictError
from .connection import DatabaseConnection


@contextmanager
def db_cursor(conn_factory: DatabaseConnection, *, dictionary: bool = True) -> Iterator[tuple[Any, Any]]:
    """Yield (connection, cursor); commit on success, roll back on any error."""
    conn = conn_factory.connect()
    try:
        cur = conn.cursor(dictionary=dictionary)
        try:
            yield conn, cur
            conn.commit()
        finally:
            cur.close()
    except Exception:
        conn.rollback()
        raise
    finally:
        conn.close()


@contextmanager
def translate_integrity_errors(message: str) -> Iterator[None]:
    """Map duplicate-key and lock conflicts raised by MySQL to ConflictError."""
    try:
        yield
    except mysql_errors.IntegrityError as e:
        if getattr(e, "errno", None) == MYSQL_DUPLICATE_KEY_ERRNO:
            raise ConflictError(message) from e
        raise
    except mysql_errors.DatabaseError as e:
        if getattr(e, "errno", None) in MYSQL_RETRYABLE_ERRNOS:
            raise ConflictError(f"{message} (storage conflict, retry the operation)") from e
        raise


def fetchone(cur) -> Optional[Dict[str, Any]]:
    row = cur.fetchone()
    return row if row else None


def fetchall(cur) -> List[Dict[str, Any]]:
    rows = cur.fetchall()
    return list(rows or [])


def normalize_mysql_datetime(value: Any) -> Optional[datetime]:
    """Normalize DATETIME values across connector implementations.

    mysql-connector returns DATETIME as datetime.datetime, but legacy columns
    holding timestamps as VARCHAR come back as strings (e.g. '2025-05-01 09:00:00'
    or '2025-05-01T09:00:00+09:00').
    """

    if value is None:
        return None

    if isinstance(value, datetime):
        return value

    if isinstance(value, (bytes, bytearray)):
        value = value.decode("utf-8")

    if isinstance(value, str):
        if not value.strip():
            return None
        return parse_iso_datetime(value)

    raise TypeError(f"Unsupported MySQL DATETIME value type: {type(value)!r}")


def normalize_mysql_decimal(value: Any) -> Decimal:
    if value is None:
        return Decimal(0)
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def normalize_mysql_json(value: Any) -> Optional[dict]:
    """JSON columns come back as str, bytes or (with some drivers) parsed dicts."""

    if value is None:
        return None
    if isinstance(value, dict):
        return value
    if isinstance(value, (bytes, bytearray)):
        value = value.decode("utf-8")
    return json.loads(value)
