# app/core/config.py

import os
from dotenv import load_dotenv
from app.utils.logger import get_logger

logger = get_logger(__name__)

load_dotenv()


def _int_env(name: str, default: int, minimum: int = 1) -> int:
    value = int(os.getenv(name, default))
    if value < minimum:
        raise ValueError(f"{name} must be >= {minimum}")
    return value


# =====================================================
# APPLICATION
# =====================================================
APP_ENV = os.getenv("APP_ENV")
if APP_ENV not in {"development", "staging", "production"}:
    raise ValueError("APP_ENV must be development | staging | production")

IS_PRODUCTION = APP_ENV == "production"

# =====================================================
# DATABASE
# =====================================================
DB_TYPE = os.getenv("DB_TYPE")
if DB_TYPE not in {"postgres", "sqlite"}:
    raise ValueError("DB_TYPE must be postgres | sqlite")

DATABASE_URL = os.getenv("DATABASE_URL")

if DB_TYPE == "postgres" and not DATABASE_URL:
    raise ValueError("DATABASE_URL is required for Postgres")

if DB_TYPE == "sqlite":
    if IS_PRODUCTION:
        raise ValueError("SQLite is NOT allowed in production")
    DATABASE_URL = DATABASE_URL or "sqlite+aiosqlite:///./locations.db"

# postgres only
DB_POOL_SIZE = _int_env("DB_POOL_SIZE", 10)
DB_MAX_OVERFLOW = _int_env("DB_MAX_OVERFLOW", 20, minimum=0)
DB_POOL_TIMEOUT = _int_env("DB_POOL_TIMEOUT", 30)
DB_SSL_VERIFY = os.getenv("DB_SSL_VERIFY", "true").lower() == "true"

if IS_PRODUCTION and not DB_SSL_VERIFY:
    logger.warning("Running in production with relaxed SSL verification")

# =====================================================
# LOCATION HIERARCHY
# =====================================================
# upper bound for levels pre-populated under one aisle
AISLE_MAX_LEVELS = _int_env("AISLE_MAX_LEVELS", 20)

# rectangles accepted in one saved layout
LAYOUT_MAX_COMPONENTS = _int_env("LAYOUT_MAX_COMPONENTS", 2000)
