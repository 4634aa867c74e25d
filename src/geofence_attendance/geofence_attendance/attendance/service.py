from __future__ import annotations

import logging
from datetime import datetime
from typing import Optional

from ..core.enums import AttendanceAction, FailureKind
from ..core.exceptions import AttendanceError, DirectoryUnavailableError, StorageUnavailableError
from ..face.service import FaceVerifier
from ..locations.model import GeoPoint
from ..locations.service import LocationService
from ..staff.model import StaffMember
from ..staff.service import StaffDirectory
from .ledger import AttendanceLedger
from .model import AttendanceFailure, AttendanceResult

logger = logging.getLogger(__name__)


class AttendanceWorkflow:
    """Single entry point for a kiosk attendance submission.

    Checks run in order and the first failure wins: geofence, staff
    directory, office permission, face verification. Only the final ledger
    transition writes anything, so every earlier failure is safe to retry.
    """

    def __init__(
        self,
        *,
        locations: LocationService,
        directory: StaffDirectory,
        faces: FaceVerifier,
        ledger: AttendanceLedger,
    ):
        self._locations = locations
        self._directory = directory
        self._faces = faces
        self._ledger = ledger

    def record_attendance(
        self,
        user_id: str,
        action: AttendanceAction,
        point: Optional[GeoPoint],
        biometric_sample: str,
        timestamp: datetime,
    ) -> AttendanceResult:
        try:
            self._require_input(user_id, biometric_sample)
            office = self._resolve_office(point)
            staff = self._authorize(user_id, office)
            self._faces.verify(biometric_sample, staff.face_subject)
            return self._ledger.apply(staff, action, office, timestamp)
        except AttendanceError as e:
            if not e.kind.is_ledger_conflict:
                logger.info("Attendance %s for %s rejected: %s", action.value, user_id, e.kind.value)
            return AttendanceFailure(kind=e.kind, message=e.message)
        except StorageUnavailableError as e:
            logger.error("Attendance store unavailable during %s for %s: %s", action.value, user_id, e)
            return AttendanceFailure(
                kind=FailureKind.DIRECTORY_UNAVAILABLE,
                message="Attendance records are unavailable right now. Please try again.",
            )

    def _require_input(self, user_id: str, biometric_sample: str) -> None:
        if not user_id or not user_id.strip():
            raise AttendanceError(FailureKind.INVALID_REQUEST, "UserID is required.")
        if not biometric_sample:
            raise AttendanceError(FailureKind.INVALID_REQUEST, "A face capture is required.")

    def _resolve_office(self, point: Optional[GeoPoint]) -> str:
        if point is None:
            raise AttendanceError(FailureKind.GEO_UNAVAILABLE, "Location unavailable. Please enable GPS and try again.")
        try:
            office = self._locations.resolve_office(point)
        except DirectoryUnavailableError as e:
            logger.error("Location source unavailable: %s", e)
            raise AttendanceError(
                FailureKind.DIRECTORY_UNAVAILABLE, "Office locations are unavailable right now. Please try again."
            ) from e
        if office is None:
            raise AttendanceError(FailureKind.OUTSIDE_APPROVED_AREA, "Not inside any registered office location.")
        return office

    def _authorize(self, user_id: str, office: str) -> StaffMember:
        try:
            staff = self._directory.find_staff(user_id.strip())
        except DirectoryUnavailableError as e:
            logger.error("Staff directory unavailable: %s", e)
            raise AttendanceError(
                FailureKind.DIRECTORY_UNAVAILABLE, "Staff directory is unavailable right now. Please try again."
            ) from e
        if staff is None:
            raise AttendanceError(FailureKind.STAFF_NOT_FOUND, "Staff not found.")
        if not staff.active:
            raise AttendanceError(FailureKind.STAFF_INACTIVE, "Staff is inactive.")
        if not staff.is_allowed_at(office):
            raise AttendanceError(FailureKind.LOCATION_NOT_PERMITTED, "Unapproved Location.")
        return staff
