"""Create the database and its tables from ``database/schema.sql``.

Exits non-zero when the server is unreachable or a table is still missing
afterwards.
"""

from __future__ import annotations

import importlib
import sys
from pathlib import Path

import mysql.connector

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from config import get_settings_module

from src.class_attendance.class_attendance.database.bootstrap import apply_schema, missing_tables


def main() -> None:
    settings = importlib.import_module(get_settings_module())
    db_config = dict(settings.DB_CONFIG)
    target = f"{db_config.get('database')} on {db_config.get('host')}:{db_config.get('port', 3306)}"

    try:
        apply_schema(db_config, schema_path=REPO_ROOT / "database" / "schema.sql")
        missing = missing_tables(db_config)
    except mysql.connector.Error as e:
        raise SystemExit(f"Cannot initialise {target}: {e}")

    if missing:
        raise SystemExit(f"schema.sql ran but {target} lacks: {', '.join(missing)}")
    print(f"OK: {target} has all class attendance tables")


if __name__ == "__main__":
    main()
