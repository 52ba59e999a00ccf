import os

SECRET_KEY = os.getenv("SECRET_KEY", "please-set-SECRET_KEY")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "wage_recap"),
}

DEBUG = False
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

DEFAULT_RECAP_MODE = os.getenv("DEFAULT_RECAP_MODE", "per_project")
WAGE_CALCULATOR = os.getenv("WAGE_CALCULATOR", "standard")
FEED_LIMIT = int(os.getenv("FEED_LIMIT", "20"))

AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))
