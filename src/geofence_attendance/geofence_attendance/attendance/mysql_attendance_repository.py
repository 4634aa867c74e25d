from __future__ import annotations

import logging
from datetime import date, datetime, tzinfo
from typing import Any, Dict, Optional

import mysql.connector
from mysql.connector import errorcode
from mysql.connector.errors import IntegrityError

from ..common.datetime_utils import to_local
from ..core.exceptions import StorageUnavailableError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchone
from .model import AttendanceRecord
from .repository import AttendanceRepository

logger = logging.getLogger(__name__)


class MySQLAttendanceRepository(AttendanceRepository):
    """Ledger rows in ``attendance_records``.

    Times are stored as naive DATETIME in the deployment zone. The UNIQUE
    (user_id, work_date) key makes clock-in an insert-if-absent.
    """

    def __init__(self, conn_factory: DatabaseConnection, *, tz: tzinfo):
        self._conn_factory = conn_factory
        self._tz = tz

    def get_record(self, user_id: str, work_date: date) -> Optional[AttendanceRecord]:
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    """
                    SELECT user_id, work_date, full_name, department,
                           clock_in_time, clock_in_location, clock_out_time, clock_out_location
                    FROM attendance_records
                    WHERE user_id=%s AND work_date=%s
                    """,
                    (user_id, work_date),
                )
                row = fetchone(cur)
        except mysql.connector.Error as e:
            raise StorageUnavailableError(f"Attendance store unavailable: {e}") from e
        if not row:
            return None
        return self._record_from_row(row)

    def create_record(self, record: AttendanceRecord) -> bool:
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    """
                    INSERT INTO attendance_records(
                        user_id, work_date, full_name, department, clock_in_time, clock_in_location
                    )
                    VALUES(%s,%s,%s,%s,%s,%s)
                    """,
                    (
                        record.user_id,
                        record.work_date,
                        record.staff_name,
                        record.department,
                        self._to_db(record.clock_in_time),
                        record.clock_in_location,
                    ),
                )
                return cur.rowcount > 0
        except IntegrityError as e:
            if e.errno == errorcode.ER_DUP_ENTRY:
                return False
            raise
        except mysql.connector.Error as e:
            raise StorageUnavailableError(f"Attendance store unavailable: {e}") from e

    def close_record(
        self,
        *,
        user_id: str,
        work_date: date,
        clock_out_time: datetime,
        clock_out_location: str,
    ) -> bool:
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    """
                    UPDATE attendance_records
                    SET clock_out_time=%s, clock_out_location=%s
                    WHERE user_id=%s AND work_date=%s
                      AND clock_in_time IS NOT NULL AND clock_out_time IS NULL
                    """,
                    (self._to_db(clock_out_time), clock_out_location, user_id, work_date),
                )
                return cur.rowcount > 0
        except mysql.connector.Error as e:
            raise StorageUnavailableError(f"Attendance store unavailable: {e}") from e

    def _to_db(self, value: Optional[datetime]) -> Optional[datetime]:
        if value is None:
            return None
        # DATETIME has no fractional seconds; MySQL would round them.
        return to_local(value, self._tz).replace(tzinfo=None, microsecond=0)

    def _from_db(self, value: Any) -> Optional[datetime]:
        if value is None:
            return None
        if not isinstance(value, datetime):
            raise TypeError(f"Unsupported DATETIME value: {value!r}")
        return to_local(value, self._tz)

    def _record_from_row(self, row: Dict[str, Any]) -> Optional[AttendanceRecord]:
        try:
            record = AttendanceRecord(
                user_id=str(row["user_id"]),
                work_date=row["work_date"],
                clock_in_time=self._from_db(row.get("clock_in_time")),
                clock_in_location=row.get("clock_in_location"),
                clock_out_time=self._from_db(row.get("clock_out_time")),
                clock_out_location=row.get("clock_out_location"),
                staff_name=row.get("full_name"),
                department=row.get("department"),
            )
        except (KeyError, TypeError) as e:
            logger.warning("Malformed attendance row for user_id=%r: %s", row.get("user_id"), e)
            return None
        if record.clock_in_time is None or not record.clock_in_location:
            logger.warning("Attendance row without clock-in for user_id=%r on %s", record.user_id, record.work_date)
            return None
        return record
