import os

SECRET_KEY = "test-secret"

STORE_BACKEND = "http"

API_BASE_URL = os.getenv("API_BASE_URL", "http://hr-api.test")
API_TIMEOUT = 1.0

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "hr_db_test"),
}

MAX_WEEKS_BACK = 11

LOG_LEVEL = "WARNING"

DEBUG = False
TESTING = True
