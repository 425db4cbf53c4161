from __future__ import annotations

import importlib
from pathlib import Path

from dotenv import load_dotenv
from flask import Flask

from config import get_settings_module

from .database.bootstrap import apply_schema, apply_seed_sql, ensure_demo_data, list_tables

from .container import build_container
from .attendance.controller import register as register_attendance
from .categories.controller import register as register_categories
from .payments.controller import register as register_payments
from .students.controller import register as register_students

DATABASE_DIR = Path(__file__).resolve().parents[3] / "database"


def create_app() -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    db_config = getattr(settings, "DB_CONFIG")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))

    app.logger.info(
        "settings=%s db=%s@%s:%s/%s",
        settings_module,
        db_config.get("user"),
        db_config.get("host"),
        db_config.get("port", 3306),
        db_config.get("database"),
    )

    if bool(getattr(settings, "AUTO_INIT_DB", False)):
        apply_schema(db_config, schema_path=DATABASE_DIR / "schema.sql")
        app.logger.info("schema ready (tables=%d)", len(list_tables(db_config)))
    if bool(getattr(settings, "AUTO_SEED_DB", False)):
        apply_seed_sql(db_config, seed_path=DATABASE_DIR / "seed.sql")
        ensure_demo_data(db_config)
        app.logger.info("demo seed ready")

    container = build_container(
        db_config=db_config,
        price_per_class=getattr(settings, "PRICE_PER_CLASS"),
        late_day_threshold=getattr(settings, "LATE_DAY_THRESHOLD"),
        min_acceptable_amount=getattr(settings, "MIN_ACCEPTABLE_AMOUNT"),
        on_unknown_weekday=getattr(settings, "ON_UNKNOWN_WEEKDAY"),
    )
    container.ledger.reload()
    app.extensions["class_attendance"] = container

    register_categories(app, container)
    register_students(app, container)
    register_attendance(app, container)
    register_payments(app, container)

    return app
