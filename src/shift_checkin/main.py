from __future__ import annotations

import logging
import os
import sys

import mysql.connector

from . import create_app
from .core.constants import DEFAULT_PORT

logger = logging.getLogger(__name__)


def main() -> None:
    try:
        app = create_app()
    except mysql.connector.Error as exc:
        # AUTO_INIT_DB applies the schema inside create_app.
        logger.error("Cannot prepare the database schema, exiting: %s", exc)
        sys.exit(1)

    container = app.extensions["shift_checkin"]
    target = container.conn.describe() if container.conn is not None else "database"

    health = container.health_service.check()
    if not health.ok:
        logger.error("Cannot reach %s, exiting: %s", target, health.error)
        sys.exit(1)
    logger.info("Connected to MySQL at %s", target)

    port = int(os.getenv("PORT", str(DEFAULT_PORT)))
    host = os.getenv("HOST", "0.0.0.0")
    logger.info("Listening on http://%s:%s", host, port)
    app.run(host=host, port=port, debug=app.config["DEBUG"], use_reloader=False)


if __name__ == "__main__":
    main()
