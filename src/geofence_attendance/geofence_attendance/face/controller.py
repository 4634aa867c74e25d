from __future__ import annotations

import logging

from flask import Flask, jsonify, request

from ..container import Container
from ..core.exceptions import FaceServiceUnavailableError

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    @app.route("/api/proxy/face-recognition", methods=["POST"], endpoint="api_face_proxy")
    def api_face_proxy():
        """Forward a captured frame to the face-recognition service.

        The API key stays on the server; the kiosk only sees normalized matches.
        """
        data = request.get_json(silent=True)
        if not isinstance(data, dict):
            data = {}
        image = data.get("file")
        if not image:
            return jsonify({"success": False, "error": "No image"}), 400

        subject = (data.get("subject") or "").strip() or None
        try:
            matches = container.face_oracle.match_face(image, subject=subject)
            return jsonify({"success": True, "matches": [m.to_dict() for m in matches]}), 200
        except FaceServiceUnavailableError as e:
            return jsonify({"success": False, "error": "Face recognition unavailable", "details": str(e)}), 503
        except Exception:
            logger.exception("POST /api/proxy/face-recognition failed")
            return jsonify({"success": False, "error": "Face recognition proxy error"}), 500
