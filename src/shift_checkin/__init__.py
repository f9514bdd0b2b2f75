"""Shift check-in service.

Employees check in once per shift per calendar day; supervisors list and
export today's check-ins for a shift. The package is organized by feature
module (``registros``) with a thin Flask controller layer over service and
repository layers.
"""
from __future__ import annotations

import importlib
import logging
from typing import Optional

from dotenv import load_dotenv
from flask import Flask, jsonify
from werkzeug.exceptions import HTTPException

from .common.logging_utils import configure_logging
from .config import get_settings_module
from .container import Container, build_container
from .core.constants import DEFAULT_TIMEZONE
from .database.bootstrap import apply_schema
from .registros.controller import register as register_registros

logger = logging.getLogger(__name__)


def _register_error_handlers(app: Flask) -> None:
    def not_found(_error):
        return jsonify({"error": "Ruta no encontrada"}), 404

    # Unmatched method on a known path is reported like an unknown route.
    app.register_error_handler(404, not_found)
    app.register_error_handler(405, not_found)

    @app.errorhandler(Exception)
    def unhandled(error):
        if isinstance(error, HTTPException):
            return error

        logger.exception("Unhandled error")
        payload = {"error": "Error interno del servidor"}
        if app.config.get("DEBUG"):
            payload["details"] = str(error)
        return jsonify(payload), 500


def create_app(container: Optional[Container] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))
    app.config["TIMEZONE"] = getattr(settings, "TIMEZONE", DEFAULT_TIMEZONE)

    configure_logging(getattr(settings, "LOG_LEVEL", "INFO"))

    if container is None:
        db_config = getattr(settings, "DB_CONFIG")
        logger.debug(
            "settings=%s db=%s@%s:%s/%s tz=%s",
            settings_module,
            db_config.get("user"),
            db_config.get("host"),
            db_config.get("port", 3306),
            db_config.get("database"),
            app.config["TIMEZONE"],
        )

        if bool(getattr(settings, "AUTO_INIT_DB", False)):
            apply_schema(db_config)

        container = build_container(db_config=db_config, timezone=app.config["TIMEZONE"])

    app.extensions["shift_checkin"] = container

    register_registros(app, container)
    _register_error_handlers(app)

    return app
