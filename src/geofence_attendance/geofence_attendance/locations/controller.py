from __future__ import annotations

import logging

from flask import Flask, jsonify

from ..container import Container
from ..core.exceptions import DirectoryUnavailableError

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    @app.route("/api/locations", methods=["GET"], endpoint="api_locations")
    def api_locations():
        try:
            locations = container.location_service.list_locations()
            return jsonify({"success": True, "locations": [loc.to_dict() for loc in locations]}), 200
        except DirectoryUnavailableError as e:
            logger.error("GET /api/locations: %s", e)
            return jsonify({"success": False, "error": "Locations unavailable"}), 503
        except Exception:
            logger.exception("GET /api/locations failed")
            return jsonify({"success": False, "error": "Server error"}), 500
