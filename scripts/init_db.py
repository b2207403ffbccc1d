from __future__ import annotations

import importlib
import logging
from pathlib import Path

from dotenv import load_dotenv

from config import get_settings_module
from timecard.core.logging import configure_logging
from timecard.database.bootstrap import apply_schema, list_tables
from timecard.database.connection import DatabaseConnection, DBConfig

logger = logging.getLogger("timecard.scripts.init_db")


def main() -> None:
    load_dotenv(override=False)
    settings = importlib.import_module(get_settings_module())
    configure_logging(getattr(settings, "LOG_LEVEL", "INFO"))

    config = DBConfig.from_dict(dict(settings.DB_CONFIG))
    conn = DatabaseConnection(config)

    schema_path = Path(__file__).resolve().parents[1] / "database" / "schema.sql"
    apply_schema(conn, schema_path=schema_path)
    tables = list_tables(conn)
    logger.info(
        "Schema ready on %s@%s:%s/%s (tables=%d)",
        config.user,
        config.host,
        config.port,
        config.database,
        len(tables),
    )


if __name__ == "__main__":
    main()
