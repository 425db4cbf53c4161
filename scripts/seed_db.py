"""Load payment concepts and demo categories/students.

Safe to run repeatedly; prints how many rows each table holds afterwards.
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

from src.class_attendance.class_attendance.database.bootstrap import apply_seed_sql, count_rows, ensure_demo_data


def main() -> None:
    settings = importlib.import_module(get_settings_module())
    db_config = dict(settings.DB_CONFIG)

    try:
        apply_seed_sql(db_config, seed_path=REPO_ROOT / "database" / "seed.sql")
        ensure_demo_data(db_config)
        counts = count_rows(db_config, ("payment_concepts", "categories", "students"))
    except mysql.connector.Error as e:
        raise SystemExit(f"Seeding {db_config.get('database')} failed: {e}")

    print(f"OK: seeded {db_config.get('database')}")
    for table, n in counts.items():
        print(f"  {table}: {n}")


if __name__ == "__main__":
    main()
