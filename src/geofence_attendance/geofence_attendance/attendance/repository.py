from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Protocol

from .model import AttendanceRecord


class AttendanceRepository(Protocol):
    """Persistence for the attendance ledger.

    Writes are conditional so that each (user_id, work_date) key changes
    state at most once per transition, even under concurrent submissions.
    """

    def get_record(self, user_id: str, work_date: date) -> Optional[AttendanceRecord]:
        raise NotImplementedError

    def create_record(self, record: AttendanceRecord) -> bool:
        """Insert if no record exists for the key. False when one already did."""

        raise NotImplementedError

    def close_record(
        self,
        *,
        user_id: str,
        work_date: date,
        clock_out_time: datetime,
        clock_out_location: str,
    ) -> bool:
        """Set the clock-out fields only if they are still empty."""

        raise NotImplementedError
