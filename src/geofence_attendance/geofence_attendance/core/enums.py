from __future__ import annotations

from enum import Enum


class AttendanceAction(str, Enum):
    """Action chosen on the kiosk. Values match what the kiosk posts."""

    CLOCK_IN = "clock in"
    CLOCK_OUT = "clock out"

    @classmethod
    def parse(cls, value: str) -> "AttendanceAction":
        normalized = " ".join(str(value or "").replace("_", " ").replace("-", " ").lower().split())
        return cls(normalized)


class LedgerState(str, Enum):
    NO_RECORD = "NO_RECORD"
    CLOCKED_IN = "CLOCKED_IN"
    CLOCKED_OUT_COMPLETE = "CLOCKED_OUT_COMPLETE"


class FailureKind(str, Enum):
    """Every user-facing failure of an attendance submission."""

    INVALID_REQUEST = "InvalidRequest"
    GEO_UNAVAILABLE = "GeoUnavailable"
    OUTSIDE_APPROVED_AREA = "OutsideApprovedArea"
    DIRECTORY_UNAVAILABLE = "DirectoryUnavailable"
    STAFF_NOT_FOUND = "StaffNotFound"
    STAFF_INACTIVE = "StaffInactive"
    LOCATION_NOT_PERMITTED = "LocationNotPermitted"
    BIOMETRIC_SERVICE_UNAVAILABLE = "BiometricServiceUnavailable"
    FACE_MISMATCH = "FaceMismatch"
    ALREADY_CLOCKED_IN = "AlreadyClockedIn"
    ALREADY_CLOCKED_OUT = "AlreadyClockedOut"
    NO_CLOCK_IN_FOUND = "NoClockInFound"

    @property
    def retryable(self) -> bool:
        return self in _RETRYABLE

    @property
    def is_ledger_conflict(self) -> bool:
        return self in _LEDGER_CONFLICTS


_RETRYABLE = frozenset(
    {
        FailureKind.GEO_UNAVAILABLE,
        FailureKind.OUTSIDE_APPROVED_AREA,
        FailureKind.DIRECTORY_UNAVAILABLE,
        FailureKind.BIOMETRIC_SERVICE_UNAVAILABLE,
        FailureKind.FACE_MISMATCH,
        FailureKind.NO_CLOCK_IN_FOUND,
    }
)

_LEDGER_CONFLICTS = frozenset(
    {
        FailureKind.ALREADY_CLOCKED_IN,
        FailureKind.ALREADY_CLOCKED_OUT,
        FailureKind.NO_CLOCK_IN_FOUND,
    }
)
