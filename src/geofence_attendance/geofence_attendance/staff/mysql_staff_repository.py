from __future__ import annotations

import logging
from typing import Any, Dict, Optional

import mysql.connector

from ..core.exceptions import DirectoryUnavailableError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchone, parse_flag, split_names
from .model import StaffMember
from .repository import StaffRepository

logger = logging.getLogger(__name__)


def staff_from_row(row: Dict[str, Any]) -> Optional[StaffMember]:
    """Typed mapping of a ``staff`` row.

    Malformed rows fail closed: they are reported as not found rather than
    producing a partially populated staff member.
    """
    try:
        user_id = str(row["user_id"] or "").strip()
        name = str(row["full_name"] or "").strip()
        if not user_id or not name:
            raise ValueError("missing user_id or full_name")
        department = str(row.get("department") or "").strip()
        return StaffMember(
            user_id=user_id,
            name=name,
            active=parse_flag(row["is_active"]),
            allowed_location_names=split_names(row.get("allowed_locations")),
            department=department or None,
        )
    except (KeyError, TypeError, ValueError) as e:
        logger.warning("Malformed staff row for user_id=%r: %s", row.get("user_id"), e)
        return None


class MySQLStaffRepository(StaffRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def find_staff(self, user_id: str) -> Optional[StaffMember]:
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    """
                    SELECT user_id, full_name, is_active, allowed_locations, department
                    FROM staff
                    WHERE user_id=%s
                    """,
                    (user_id,),
                )
                row = fetchone(cur)
        except mysql.connector.Error as e:
            raise DirectoryUnavailableError(f"Staff directory unavailable: {e}") from e
        if not row:
            return None
        return staff_from_row(row)
