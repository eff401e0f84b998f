"""
Configuration settings for the User Records service
"""

import os
from urllib.parse import quote

# Database configuration
DB_HOST = os.getenv("DB_HOST", "localhost")
DB_PORT = int(os.getenv("DB_PORT", 5432))
DB_USER = os.getenv("DB_USER", "postgres")
DB_PASSWORD = os.getenv("DB_PASSWORD", "")
DB_NAME = os.getenv("DB_NAME", "crud_app")
DATABASE_URL = os.getenv("DATABASE_URL")

# Pool sizing; a min size of 0 lets the service start while the database is down
DB_POOL_MIN_SIZE = int(os.getenv("DB_POOL_MIN_SIZE", 0))
DB_POOL_MAX_SIZE = int(os.getenv("DB_POOL_MAX_SIZE", 10))
DB_COMMAND_TIMEOUT = float(os.getenv("DB_COMMAND_TIMEOUT", 60))

# Abort startup when the users table cannot be created
DB_BOOTSTRAP_STRICT = os.getenv("DB_BOOTSTRAP_STRICT", "false").lower() in {"1", "true", "yes"}

# Logging configuration
LOG_DIR = os.getenv("LOG_DIR", "/var/logs/crud")
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

PORT = int(os.getenv("PORT", 3000))

# CORS settings
ALLOWED_ORIGINS = [origin.strip() for origin in os.getenv("ALLOWED_ORIGINS", "*").split(",") if origin.strip()]


def get_database_dsn() -> str:
    """Return DATABASE_URL, or build a DSN from the individual DB_* settings"""
    if DATABASE_URL:
        return DATABASE_URL
    return f"postgresql://{quote(DB_USER, safe='')}:{quote(DB_PASSWORD, safe='')}@{DB_HOST}:{DB_PORT}/{DB_NAME}"
