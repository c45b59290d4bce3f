import os

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

# "http" talks to the HR REST backend, "mysql" reads the HR database directly.
STORE_BACKEND = os.getenv("STORE_BACKEND", "http")

API_BASE_URL = os.getenv("API_BASE_URL", "http://localhost:3001/api")
API_TIMEOUT = float(os.getenv("API_TIMEOUT", "10"))

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "hr_db"),
}

# Week navigation goes back this many weeks from the current one.
MAX_WEEKS_BACK = int(os.getenv("MAX_WEEKS_BACK", "11"))

LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")

DEBUG = True
