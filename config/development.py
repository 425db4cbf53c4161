import os

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "class_attendance_db"),
}

# Reconciliation
PRICE_PER_CLASS = float(os.getenv("PRICE_PER_CLASS", "15"))
LATE_DAY_THRESHOLD = int(os.getenv("LATE_DAY_THRESHOLD", "5"))
MIN_ACCEPTABLE_AMOUNT = float(os.getenv("MIN_ACCEPTABLE_AMOUNT", "30"))

# "empty" or "defaultDay(n)", n = ISO weekday (1 = Monday)
ON_UNKNOWN_WEEKDAY = os.getenv("ON_UNKNOWN_WEEKDAY", "empty")

DEBUG = True

# If enabled, app will apply schema.sql on startup (idempotent: CREATE IF NOT EXISTS)
AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "1")))
# Optional: also seed demo categories/students on startup
AUTO_SEED_DB = bool(int(os.getenv("AUTO_SEED_DB", "0")))
