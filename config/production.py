import os

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "shift_attendance"),
}

DEBUG = False
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))

DEFAULT_TIME_ZONE = os.getenv("DEFAULT_TIME_ZONE", "Asia/Kolkata")
CHECK_IN_WINDOW_MINUTES = int(os.getenv("CHECK_IN_WINDOW_MINUTES", "60"))
CHECK_OUT_WINDOW_MINUTES = int(os.getenv("CHECK_OUT_WINDOW_MINUTES", "120"))
MIN_WORK_DURATION_MINUTES = int(os.getenv("MIN_WORK_DURATION_MINUTES", "240"))
REGULARIZATION_MONTHLY_QUOTA = int(os.getenv("REGULARIZATION_MONTHLY_QUOTA", "3"))
