import os
import logging
from urllib.parse import quote

logging.basicConfig(level=logging.INFO, format='%(asctime)s - %(name)s - %(levelname)s - %(message)s')
log = logging.getLogger("cafe.config")


def _build_db_url() -> str:
    """
    Resolves the database URL. DATABASE_URL wins; otherwise the URL is assembled
    from the individual DB_* variables. Missing settings are logged and the
    service falls back to a local SQLite file instead of refusing to start.
    """
    url = os.getenv("DATABASE_URL")
    if url:
        return url

    host = os.getenv("DB_HOST")
    user = os.getenv("DB_USERNAME")
    name = os.getenv("DB_NAME")
    if not (host and user and name):
        log.error("Missing required database environment variables (DB_HOST, DB_USERNAME, DB_NAME).")
        return os.getenv("FALLBACK_DATABASE_URL", "sqlite://cafe.sqlite3")

    engine = os.getenv("DB_ENGINE", "postgres")
    port = os.getenv("DB_PORT", "5432" if engine == "postgres" else "3306")
    password = quote(os.getenv("DB_PASSWORD", ""), safe="")
    return f"{engine}://{quote(user, safe='')}:{password}@{host}:{port}/{name}"


# Database Configuration
DB_URL = _build_db_url()

# Application Metadata
PROJECT_NAME = "Cafe Order Management System"
VERSION = "1.0.0"

# Business day: one of the keys of cafe.core.business_day.TIMEZONES
DEFAULT_TIMEZONE = os.getenv("DEFAULT_TIMEZONE", "IST")

# Orders
ORDER_NUMBER_WIDTH = int(os.getenv("ORDER_NUMBER_WIDTH", 3)) # Zero padding of the per-day order number
ORDER_NUMBER_ATTEMPTS = int(os.getenv("ORDER_NUMBER_ATTEMPTS", 5)) # Retries when two creates grab the same number

# Reporting
TOP_ITEMS_LIMIT = int(os.getenv("TOP_ITEMS_LIMIT", 5))

# Sessions
SESSION_TTL_HOURS = int(os.getenv("SESSION_TTL_HOURS", 12))

# Initial admin account, created at startup only when the users table is empty
ADMIN_USERNAME = os.getenv("ADMIN_USERNAME")
ADMIN_PASSWORD = os.getenv("ADMIN_PASSWORD")
