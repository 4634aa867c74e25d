from __future__ import annotations

import logging

from flask import Flask, jsonify, request

from ..common.datetime_utils import now_local, work_date_for
from ..common.validators import parse_coordinate, require_user_id
from ..container import Container
from ..core.enums import AttendanceAction, FailureKind
from ..core.exceptions import StorageUnavailableError, ValidationError
from ..locations.model import GeoPoint
from .model import AttendanceFailure, state_of

logger = logging.getLogger(__name__)

FAILURE_STATUS = {
    FailureKind.INVALID_REQUEST: 400,
    FailureKind.GEO_UNAVAILABLE: 400,
    FailureKind.OUTSIDE_APPROVED_AREA: 403,
    FailureKind.STAFF_NOT_FOUND: 404,
    FailureKind.STAFF_INACTIVE: 403,
    FailureKind.LOCATION_NOT_PERMITTED: 403,
    FailureKind.FACE_MISMATCH: 403,
    FailureKind.DIRECTORY_UNAVAILABLE: 503,
    FailureKind.BIOMETRIC_SERVICE_UNAVAILABLE: 503,
    FailureKind.ALREADY_CLOCKED_IN: 409,
    FailureKind.ALREADY_CLOCKED_OUT: 409,
    FailureKind.NO_CLOCK_IN_FOUND: 409,
}


def register(app: Flask, container: Container) -> None:
    def _invalid(message: str):
        failure = AttendanceFailure(kind=FailureKind.INVALID_REQUEST, message=message)
        return jsonify(failure.to_dict()), FAILURE_STATUS[failure.kind]

    @app.route("/api/attendance/web", methods=["POST"], endpoint="api_attendance_web")
    def api_attendance_web():
        """Clock in or out from the kiosk.

        The server clock decides the time; a client ``timestamp`` is ignored.
        """
        data = request.get_json(silent=True)
        if not isinstance(data, dict):
            data = {}
        try:
            user_id = require_user_id(data.get("userId"), container.settings.user_id_pattern)
            try:
                action = AttendanceAction.parse(data.get("action"))
            except ValueError:
                return _invalid("Unknown action.")
            latitude = parse_coordinate(data.get("latitude"), "latitude", limit=90.0)
            longitude = parse_coordinate(data.get("longitude"), "longitude", limit=180.0)
        except ValidationError as e:
            return _invalid(str(e))

        point = GeoPoint(latitude, longitude) if latitude is not None and longitude is not None else None
        image = data.get("image") or data.get("file") or ""

        try:
            result = container.workflow.record_attendance(
                user_id,
                action,
                point,
                image,
                now_local(container.settings.tz),
            )
        except Exception:
            logger.exception("POST /api/attendance/web failed")
            return jsonify({"success": False, "message": "Server error"}), 500

        if result.success:
            return jsonify(result.to_dict()), 200
        return jsonify(result.to_dict()), FAILURE_STATUS.get(result.kind, 400)

    @app.route("/api/attendance/today/<user_id>", methods=["GET"], endpoint="api_attendance_today")
    def api_attendance_today(user_id: str):
        """Today's ledger entry, so the kiosk can offer the right action."""
        try:
            user_id = require_user_id(user_id, container.settings.user_id_pattern)
        except ValidationError as e:
            return jsonify({"success": False, "error": str(e)}), 400

        try:
            today = work_date_for(now_local(container.settings.tz), container.settings.tz)
            record = container.attendance_repo.get_record(user_id, today)
            return jsonify(
                {
                    "success": True,
                    "date": today.strftime("%Y-%m-%d"),
                    "state": state_of(record).value,
                    "record": record.to_dict() if record else None,
                }
            ), 200
        except StorageUnavailableError as e:
            logger.error("GET /api/attendance/today/%s: %s", user_id, e)
            return jsonify({"success": False, "error": "Attendance records unavailable"}), 503
        except Exception:
            logger.exception("GET /api/attendance/today/%s failed", user_id)
            return jsonify({"success": False, "error": "Server error"}), 500
