from tortoise import Tortoise
from cafe.core.config import DB_URL
import logging
from logging import INFO

# Set logging level for Tortoise ORM
logging.getLogger('tortoise').setLevel(INFO)
log = logging.getLogger("cafe.db")

# Define all models modules for the ORM
MODELS_MODULES = [
    "cafe.models.menu",
    "cafe.models.inventory",
    "cafe.models.order",
    "cafe.models.sales",
    "cafe.models.user",
    "cafe.models.settings",
]


async def init_db(db_url: str = DB_URL):
    """Initializes the Tortoise ORM connection and generates schemas."""
    try:
        await Tortoise.init(
            db_url=db_url,
            modules={"models": MODELS_MODULES},
        )
        # Generate the database schema (create tables)
        await Tortoise.generate_schemas()
        log.info("Database connection established and schemas generated.")
    except Exception as e:
        log.critical(f"Could not connect to database. Error: {e}")
        # Re-raise to prevent the application from starting without a database
        raise


async def close_db():
    """Closes all database connections."""
    await Tortoise.close_connections()
    log.info("Database connections closed.")
