import os

SECRET_KEY = os.getenv("SECRET_KEY", "please-set-SECRET_KEY")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "class_attendance_db"),
}

PRICE_PER_CLASS = float(os.getenv("PRICE_PER_CLASS", "15"))
LATE_DAY_THRESHOLD = int(os.getenv("LATE_DAY_THRESHOLD", "5"))
MIN_ACCEPTABLE_AMOUNT = float(os.getenv("MIN_ACCEPTABLE_AMOUNT", "30"))
ON_UNKNOWN_WEEKDAY = os.getenv("ON_UNKNOWN_WEEKDAY", "empty")

DEBUG = False

AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))
AUTO_SEED_DB = bool(int(os.getenv("AUTO_SEED_DB", "0")))
