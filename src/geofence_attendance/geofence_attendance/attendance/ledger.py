from __future__ import annotations

import logging
from datetime import datetime, tzinfo

from ..common.datetime_utils import format_clock_time, to_local, work_date_for
from ..core.enums import AttendanceAction, FailureKind, LedgerState
from ..core.exceptions import AttendanceError
from ..staff.model import StaffMember
from .model import AttendanceRecord, AttendanceSuccess, state_of
from .repository import AttendanceRepository

logger = logging.getLogger(__name__)


class AttendanceLedger:
    """Same-day clock-in/clock-out state machine per (user, date).

    NO_RECORD -> CLOCKED_IN -> CLOCKED_OUT_COMPLETE. Every write is
    conditional; a writer that loses a race re-reads the record and reports
    the conflict it lost to.
    """

    def __init__(self, attendance: AttendanceRepository, *, tz: tzinfo):
        self._attendance = attendance
        self._tz = tz

    def current_state(self, user_id: str, when: datetime) -> LedgerState:
        return state_of(self._attendance.get_record(user_id, work_date_for(when, self._tz)))

    def apply(
        self,
        staff: StaffMember,
        action: AttendanceAction,
        office: str,
        timestamp: datetime,
    ) -> AttendanceSuccess:
        # Ledger times are kept to whole seconds, as stored.
        now = to_local(timestamp, self._tz).replace(microsecond=0)
        if action == AttendanceAction.CLOCK_IN:
            return self._clock_in(staff, office, now)
        if action == AttendanceAction.CLOCK_OUT:
            return self._clock_out(staff, office, now)
        raise AttendanceError(FailureKind.INVALID_REQUEST, "Unknown action.")

    def _clock_in(self, staff: StaffMember, office: str, now: datetime) -> AttendanceSuccess:
        work_date = now.date()
        existing = self._attendance.get_record(staff.user_id, work_date)
        if state_of(existing) != LedgerState.NO_RECORD:
            raise self._conflict(FailureKind.ALREADY_CLOCKED_IN, staff, work_date)

        record = AttendanceRecord(
            user_id=staff.user_id,
            work_date=work_date,
            clock_in_time=now,
            clock_in_location=office,
            staff_name=staff.name,
            department=staff.department,
        )
        if not self._attendance.create_record(record):
            # Another submission created the record between our read and write.
            raise self._conflict(FailureKind.ALREADY_CLOCKED_IN, staff, work_date)

        logger.info("Clock-in recorded for %s at %s (%s)", staff.user_id, now.isoformat(), office)
        return AttendanceSuccess(
            message=f"Dear {staff.name}, clock-in recorded at {format_clock_time(now)} ({office}).",
            office=office,
            time=now,
            action=AttendanceAction.CLOCK_IN,
            record=record,
        )

    def _clock_out(self, staff: StaffMember, office: str, now: datetime) -> AttendanceSuccess:
        work_date = now.date()
        existing = self._attendance.get_record(staff.user_id, work_date)
        state = state_of(existing)
        if state == LedgerState.NO_RECORD:
            raise self._conflict(FailureKind.NO_CLOCK_IN_FOUND, staff, work_date)
        if state == LedgerState.CLOCKED_OUT_COMPLETE:
            raise self._conflict(FailureKind.ALREADY_CLOCKED_OUT, staff, work_date)

        if now <= existing.clock_in_time:
            raise AttendanceError(
                FailureKind.INVALID_REQUEST,
                f"Dear {staff.name}, clock-out time must be later than your clock-in time.",
            )

        closed = self._attendance.close_record(
            user_id=staff.user_id,
            work_date=work_date,
            clock_out_time=now,
            clock_out_location=office,
        )
        if not closed:
            raise self._conflict(FailureKind.ALREADY_CLOCKED_OUT, staff, work_date)

        logger.info("Clock-out recorded for %s at %s (%s)", staff.user_id, now.isoformat(), office)
        return AttendanceSuccess(
            message=f"Dear {staff.name}, clock-out recorded at {format_clock_time(now)} ({office}).",
            office=office,
            time=now,
            action=AttendanceAction.CLOCK_OUT,
            record=existing.with_clock_out(time=now, location=office),
        )

    def _conflict(self, kind: FailureKind, staff: StaffMember, work_date) -> AttendanceError:
        logger.warning("Ledger conflict %s for %s on %s", kind.value, staff.user_id, work_date)
        messages = {
            FailureKind.ALREADY_CLOCKED_IN: f"Dear {staff.name}, you have already clocked in today.",
            FailureKind.ALREADY_CLOCKED_OUT: f"Dear {staff.name}, you have already clocked out today.",
            FailureKind.NO_CLOCK_IN_FOUND: f"Dear {staff.name}, no clock-in found for today.",
        }
        return AttendanceError(kind, messages[kind])
