from __future__ import annotations

import importlib
import logging
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from flask import Flask, jsonify

from config import get_settings_module

from .attendance.controller import register as register_attendance
from .container import Container, KioskSettings, build_container
from .database.bootstrap import apply_schema, apply_seed_sql, list_tables
from .face.controller import register as register_face
from .locations.controller import register as register_locations
from .staff.controller import register as register_staff

logger = logging.getLogger(__name__)

DATABASE_DIR = Path(__file__).resolve().parents[3] / "database"


def create_app(container: Optional[Container] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    db_config = getattr(settings, "DB_CONFIG")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["MAX_CONTENT_LENGTH"] = int(getattr(settings, "MAX_CONTENT_LENGTH", 12 * 1024 * 1024))
    app.config["PORT"] = int(getattr(settings, "PORT", 3000))

    logging.basicConfig(
        level=getattr(settings, "LOG_LEVEL", "INFO"),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )

    if container is None:
        logger.info(
            "settings=%s db=%s@%s:%s/%s",
            settings_module,
            db_config.get("user"),
            db_config.get("host"),
            db_config.get("port", 3306),
            db_config.get("database"),
        )

        if bool(getattr(settings, "AUTO_INIT_DB", False)):
            apply_schema(db_config, schema_path=DATABASE_DIR / "schema.sql")
            logger.info("schema ready (tables=%d)", len(list_tables(db_config)))
        if bool(getattr(settings, "AUTO_SEED_DB", False)):
            apply_seed_sql(db_config, seed_path=DATABASE_DIR / "seed.sql")
            logger.info("demo seed ready")

        container = build_container(db_config=db_config, settings=KioskSettings.from_module(settings))

    register_locations(app, container)
    register_staff(app, container)
    register_face(app, container)
    register_attendance(app, container)

    @app.route("/api/health", methods=["GET"], endpoint="api_health")
    def api_health():
        try:
            if container.conn is not None:
                container.conn.ping()
            return jsonify({"success": True, "message": "Connected"}), 200
        except Exception as e:
            logger.error("Health check failed: %s", e)
            return jsonify({"success": False, "message": "Database unreachable"}), 503

    return app
