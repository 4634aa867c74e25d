from __future__ import annotations

import math
from datetime import date, datetime, timezone

import pytest
from mysql.connector.errors import InterfaceError

from src.geofence_attendance.geofence_attendance.attendance.ledger import AttendanceLedger
from src.geofence_attendance.geofence_attendance.attendance.mysql_attendance_repository import (
    MySQLAttendanceRepository,
)
from src.geofence_attendance.geofence_attendance.attendance.service import AttendanceWorkflow
from src.geofence_attendance.geofence_attendance.core.enums import AttendanceAction, FailureKind, LedgerState
from src.geofence_attendance.geofence_attendance.core.exceptions import DirectoryUnavailableError
from src.geofence_attendance.geofence_attendance.locations.model import GeoPoint
from src.geofence_attendance.geofence_attendance.staff.model import StaffMember

CLOCK_IN = AttendanceAction.CLOCK_IN
CLOCK_OUT = AttendanceAction.CLOCK_OUT
HQ_CENTER = GeoPoint(9.400, -0.850)


def at(hour, minute=0):
    return datetime(2026, 3, 2, hour, minute, tzinfo=timezone.utc)


def meters_north(point: GeoPoint, meters: float) -> GeoPoint:
    return GeoPoint(point.latitude + math.degrees(meters / 6371000.0), point.longitude)


def test_clock_in_then_duplicate_clock_in(container, attendance_repo):
    wf = container.workflow

    first = wf.record_attendance("001", CLOCK_IN, HQ_CENTER, "img", at(8))
    assert first.success
    assert first.office == "HQ"
    record = attendance_repo.get_record("001", date(2026, 3, 2))
    assert record.clock_in_location == "HQ"

    second = wf.record_attendance("001", CLOCK_IN, HQ_CENTER, "img", at(8, 5))
    assert not second.success
    assert second.kind == FailureKind.ALREADY_CLOCKED_IN
    assert not second.retryable


def test_clock_out_then_duplicate_clock_out(container, attendance_repo):
    wf = container.workflow
    wf.record_attendance("001", CLOCK_IN, HQ_CENTER, "img", at(8))

    out = wf.record_attendance("001", CLOCK_OUT, HQ_CENTER, "img", at(17))
    assert out.success
    record = attendance_repo.get_record("001", date(2026, 3, 2))
    assert record.clock_out_time == at(17)
    assert record.state == LedgerState.CLOCKED_OUT_COMPLETE

    again = wf.record_attendance("001", CLOCK_OUT, HQ_CENTER, "img", at(17, 1))
    assert again.kind == FailureKind.ALREADY_CLOCKED_OUT


def test_outside_geofence_fails_before_anything_else(container, face_oracle, attendance_repo):
    far = meters_north(HQ_CENTER, 500)
    for user_id in ("001", "002", "999"):
        result = container.workflow.record_attendance(user_id, CLOCK_IN, far, "img", at(8))
        assert result.kind == FailureKind.OUTSIDE_APPROVED_AREA
    assert face_oracle.calls == []
    assert attendance_repo.records() == []


def test_face_mismatch_then_retry_succeeds(container, face_oracle, attendance_repo):
    face_oracle.similarity = 0.62
    result = container.workflow.record_attendance("001", CLOCK_IN, HQ_CENTER, "img", at(8))
    assert result.kind == FailureKind.FACE_MISMATCH
    assert result.retryable
    assert attendance_repo.records() == []

    face_oracle.similarity = 0.75
    retry = container.workflow.record_attendance("001", CLOCK_IN, HQ_CENTER, "img", at(8, 1))
    assert retry.success


def test_inactive_staff_is_rejected_without_biometric_or_ledger_work(container, face_oracle, attendance_repo):
    result = container.workflow.record_attendance("002", CLOCK_IN, HQ_CENTER, "img", at(8))

    assert result.kind == FailureKind.STAFF_INACTIVE
    assert face_oracle.calls == []
    assert attendance_repo.writes == 0


def test_unknown_staff(container):
    result = container.workflow.record_attendance("404", CLOCK_IN, HQ_CENTER, "img", at(8))
    assert result.kind == FailureKind.STAFF_NOT_FOUND


def test_office_not_in_allow_list(container, face_oracle):
    container.staff_repo.by_id["003"] = StaffMember(
        user_id="003", name="Yaw", active=True, allowed_location_names=frozenset({"Annex"})
    )
    result = container.workflow.record_attendance("003", CLOCK_IN, HQ_CENTER, "img", at(8))
    assert result.kind == FailureKind.LOCATION_NOT_PERMITTED
    assert face_oracle.calls == []


def test_missing_gps_fix(container):
    result = container.workflow.record_attendance("001", CLOCK_IN, None, "img", at(8))
    assert result.kind == FailureKind.GEO_UNAVAILABLE


def test_missing_image_is_invalid(container):
    result = container.workflow.record_attendance("001", CLOCK_IN, HQ_CENTER, "", at(8))
    assert result.kind == FailureKind.INVALID_REQUEST


def test_face_service_down(container, face_oracle, attendance_repo):
    face_oracle.unavailable = True
    result = container.workflow.record_attendance("001", CLOCK_IN, HQ_CENTER, "img", at(8))
    assert result.kind == FailureKind.BIOMETRIC_SERVICE_UNAVAILABLE
    assert attendance_repo.records() == []


def test_face_is_checked_against_staff_name(container, face_oracle):
    container.workflow.record_attendance("001", CLOCK_IN, HQ_CENTER, "img-bytes", at(8))
    assert face_oracle.calls == [("img-bytes", "Ama Mensah")]


def test_directory_outage(container, monkeypatch):
    def boom(user_id):
        raise DirectoryUnavailableError("timeout")

    monkeypatch.setattr(container.staff_repo, "find_staff", boom)
    result = container.workflow.record_attendance("001", CLOCK_IN, HQ_CENTER, "img", at(8))
    assert result.kind == FailureKind.DIRECTORY_UNAVAILABLE


def test_clock_out_without_clock_in(container):
    result = container.workflow.record_attendance("001", CLOCK_OUT, HQ_CENTER, "img", at(17))
    assert result.kind == FailureKind.NO_CLOCK_IN_FOUND
    assert "no clock-in found" in result.message
    assert result.retryable


@pytest.mark.parametrize("raw", ["clock in", "Clock In", "clock_in", "CLOCK-IN"])
def test_action_parsing(raw):
    assert AttendanceAction.parse(raw) == CLOCK_IN


def test_unknown_action_raises():
    with pytest.raises(ValueError):
        AttendanceAction.parse("lunch break")


class UnreachableDatabase:
    def connect(self):
        raise InterfaceError(msg="Can't connect to MySQL server", errno=2003)


def test_attendance_store_outage_is_a_failure_result(container, tz):
    ledger = AttendanceLedger(MySQLAttendanceRepository(UnreachableDatabase(), tz=tz), tz=tz)
    wf = AttendanceWorkflow(
        locations=container.location_service,
        directory=container.staff_directory,
        faces=container.face_verifier,
        ledger=ledger,
    )

    for action in (CLOCK_IN, CLOCK_OUT):
        result = wf.record_attendance("001", action, HQ_CENTER, "img", at(8))
        assert not result.success
        assert result.kind == FailureKind.DIRECTORY_UNAVAILABLE
        assert result.retryable
