import os

SECRET_KEY = os.getenv("SECRET_KEY", "please-set-SECRET_KEY")

STORE_BACKEND = os.getenv("STORE_BACKEND", "http")

API_BASE_URL = os.getenv("API_BASE_URL")
API_TIMEOUT = float(os.getenv("API_TIMEOUT", "10"))

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "hr_db"),
}

MAX_WEEKS_BACK = int(os.getenv("MAX_WEEKS_BACK", "11"))

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

DEBUG = False
