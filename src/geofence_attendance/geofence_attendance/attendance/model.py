from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import date, datetime
from typing import Optional, Union

from ..common.datetime_utils import format_clock_time
from ..core.enums import AttendanceAction, FailureKind, LedgerState


@dataclass(frozen=True)
class AttendanceRecord:
    """One staff member's attendance for one calendar day.

    Clock-in fields are set together when the record is created; clock-out
    fields are set together, once.
    """

    user_id: str
    work_date: date
    clock_in_time: Optional[datetime] = None
    clock_in_location: Optional[str] = None
    clock_out_time: Optional[datetime] = None
    clock_out_location: Optional[str] = None
    staff_name: Optional[str] = None
    department: Optional[str] = None

    @property
    def state(self) -> LedgerState:
        if self.clock_out_time is not None:
            return LedgerState.CLOCKED_OUT_COMPLETE
        if self.clock_in_time is not None:
            return LedgerState.CLOCKED_IN
        return LedgerState.NO_RECORD

    def with_clock_out(self, *, time: datetime, location: str) -> "AttendanceRecord":
        return replace(self, clock_out_time=time, clock_out_location=location)

    def to_dict(self) -> dict:
        return {
            "userId": self.user_id,
            "date": self.work_date.strftime("%Y-%m-%d"),
            "name": self.staff_name,
            "department": self.department,
            "timeIn": format_clock_time(self.clock_in_time) if self.clock_in_time else None,
            "clockInLocation": self.clock_in_location,
            "timeOut": format_clock_time(self.clock_out_time) if self.clock_out_time else None,
            "clockOutLocation": self.clock_out_location,
            "state": self.state.value,
        }


def state_of(record: Optional[AttendanceRecord]) -> LedgerState:
    return record.state if record is not None else LedgerState.NO_RECORD


@dataclass(frozen=True)
class AttendanceSuccess:
    message: str
    office: str
    time: datetime
    action: AttendanceAction
    record: AttendanceRecord

    success = True

    def to_dict(self) -> dict:
        return {
            "success": True,
            "action": self.action.value,
            "message": self.message,
            "office": self.office,
            "time": format_clock_time(self.time),
            "record": self.record.to_dict(),
        }


@dataclass(frozen=True)
class AttendanceFailure:
    kind: FailureKind
    message: str

    success = False

    @property
    def retryable(self) -> bool:
        return self.kind.retryable

    def to_dict(self) -> dict:
        return {
            "success": False,
            "kind": self.kind.value,
            "message": self.message,
            "retryable": self.retryable,
        }


AttendanceResult = Union[AttendanceSuccess, AttendanceFailure]
