from __future__ import annotations

from contextlib import contextmanager
from typing import Any, Dict, List, Optional

from .connection import DatabaseConnection


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


def parse_flag(value: Any) -> bool:
    """Normalize yes/no style flags.

    Rows imported from the legacy sheets store "Yes"/"No"; native rows use TINYINT.
    """

    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return value != 0
    if isinstance(value, (bytes, bytearray)):
        value = value.decode("utf-8")
    if isinstance(value, str):
        normalized = value.strip().lower()
        if normalized in {"yes", "y", "true", "1", "active"}:
            return True
        if normalized in {"no", "n", "false", "0", "inactive", ""}:
            return False
    raise ValueError(f"Unsupported flag value: {value!r}")


def split_names(value: Any) -> frozenset[str]:
    """Split a comma-separated list of names (e.g. allowed locations)."""

    if value is None:
        return frozenset()
    if isinstance(value, (bytes, bytearray)):
        value = value.decode("utf-8")
    return frozenset(part.strip() for part in str(value).split(",") if part.strip())
