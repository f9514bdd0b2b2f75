from __future__ import annotations

import importlib
import logging

from dotenv import load_dotenv

from shift_checkin.common.logging_utils import configure_logging
from shift_checkin.config import get_settings_module
from shift_checkin.database.bootstrap import apply_schema

logger = logging.getLogger("init_db")


def main() -> None:
    load_dotenv(override=False)
    configure_logging("INFO")

    settings = importlib.import_module(get_settings_module())
    db_config = dict(settings.DB_CONFIG)

    apply_schema(db_config)
    logger.info(
        "Applied schema.sql -> %s@%s:%s/%s",
        db_config.get("user"),
        db_config.get("host"),
        db_config.get("port", 3306),
        db_config.get("database"),
    )


if __name__ == "__main__":
    main()
