from __future__ import annotations

import importlib
import logging
import time
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from flask import Flask, jsonify

from config import get_settings_module

from . import __version__
from .attendance.controller import register as register_attendance
from .common.http import register_error_handlers
from .container import Container, build_container
from .core.constants import DEFAULT_SLOW_REQUEST_MS, DEFAULT_TOKEN_HOURS
from .core.logging import configure_logging, install_request_logging
from .database.bootstrap import apply_schema
from .users.controller import register as register_users

logger = logging.getLogger(__name__)

SCHEMA_PATH = Path(__file__).resolve().parents[3] / "database" / "schema.sql"


def create_app(container: Optional[Container] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))
    app.json.sort_keys = False

    configure_logging(
        getattr(settings, "LOG_LEVEL", "INFO"),
        json_output=bool(getattr(settings, "LOG_JSON", False)),
    )

    if container is None:
        db_config = getattr(settings, "DB_CONFIG")
        logger.info(
            "settings=%s db=%s@%s:%s/%s",
            settings_module,
            db_config.get("user"),
            db_config.get("host"),
            db_config.get("port", 3306),
            db_config.get("database"),
        )
        container = build_container(
            db_config=db_config,
            jwt_secret=getattr(settings, "JWT_SECRET"),
            jwt_expires_hours=int(getattr(settings, "JWT_EXPIRES_HOURS", DEFAULT_TOKEN_HOURS)),
        )
        if bool(getattr(settings, "AUTO_INIT_DB", False)):
            apply_schema(container.conn, schema_path=SCHEMA_PATH)

    install_request_logging(app, slow_request_ms=int(getattr(settings, "SLOW_REQUEST_MS", DEFAULT_SLOW_REQUEST_MS)))
    register_error_handlers(app)

    register_users(app, container)
    register_attendance(app, container)

    started = time.monotonic()

    @app.route("/health", methods=["GET"], endpoint="health")
    def health():
        return jsonify(
            {
                "status": "OK",
                "version": __version__,
                "environment": settings_module.rsplit(".", 1)[-1],
                "timestamp": datetime.now(timezone.utc).isoformat(),
                "uptime": round(time.monotonic() - started, 3),
            }
        )

    return app
