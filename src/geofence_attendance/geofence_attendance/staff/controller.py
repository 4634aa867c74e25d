from __future__ import annotations

import logging

from flask import Flask, jsonify

from ..common.validators import require_user_id
from ..container import Container
from ..core.exceptions import DirectoryUnavailableError, ValidationError

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    @app.route("/api/staff/<user_id>", methods=["GET"], endpoint="api_staff")
    def api_staff(user_id: str):
        """Kiosk identity step: resolve a typed UserID to an active staff member."""
        try:
            user_id = require_user_id(user_id, container.settings.user_id_pattern)
            staff = container.staff_directory.find_staff(user_id)
            if staff is None or not staff.active:
                return jsonify({"success": False, "error": "Staff not found or inactive"}), 404
            return jsonify({"success": True, **staff.to_dict()}), 200
        except ValidationError as e:
            return jsonify({"success": False, "error": str(e)}), 400
        except DirectoryUnavailableError as e:
            logger.error("GET /api/staff/%s: %s", user_id, e)
            return jsonify({"success": False, "error": "Staff directory unavailable"}), 503
        except Exception:
            logger.exception("GET /api/staff/%s failed", user_id)
            return jsonify({"success": False, "error": "Server error"}), 500
