# This file creates the film, actor, and film_actor tables in the configured database.
# It exists so a fresh environment can be prepared without hand-written DDL.
# Existing tables are left untouched, so rerunning the script is safe.
# ruff: noqa: E402

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

ROOT_DIR = Path(__file__).resolve().parent.parent
if str(ROOT_DIR) not in sys.path:
    sys.path.insert(0, str(ROOT_DIR))

from src.api.db_access import DatabaseClient
from src.api.db_schema import CATALOG_TABLES, create_schema
from src.common.logging import configure_logging
from src.common.settings import get_settings

logger = logging.getLogger(__name__)


def init_db(database_url: str) -> dict[str, bool]:
    db = DatabaseClient(database_url=database_url)
    create_schema(db.engine)
    status = {table_name: db.table_exists(table_name) for table_name in CATALOG_TABLES}
    logger.info("Catalog tables present: %s", status)
    return status


def main() -> int:
    parser = argparse.ArgumentParser(description="Create the film library tables.")
    parser.add_argument(
        "--database-url",
        default=None,
        help="Override DATABASE_URL from the environment.",
    )
    args = parser.parse_args()

    configure_logging()
    database_url = args.database_url or get_settings().DATABASE_URL
    status = init_db(database_url)
    print(json.dumps(status, indent=2))
    return 0 if all(status.values()) else 1


if __name__ == "__main__":
    raise SystemExit(main())
