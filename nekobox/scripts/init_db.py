#!/usr/bin/env python3
"""
Database initialization script.

Creates the question tables in the database described by the current
settings (DATABASE_URL or the DB_* variables).
"""

import sys
import asyncio

from nekobox.common.db.connection import get_database_settings
from nekobox.common.exceptions import ConfigurationError
from nekobox.common.logger import app_logger
from nekobox.database.init_db import close_database, create_tables, initialize_database

logger = app_logger.getChild("scripts.init_db")


async def async_main() -> int:
    """Initialize the database."""
    try:
        db_settings = get_database_settings()
    except ConfigurationError as e:
        logger.error(str(e))
        return 1

    engine = await initialize_database(db_settings)
    try:
        await create_tables(engine)
    finally:
        await close_database(engine)

    logger.info("Database initialized successfully")
    return 0


def main() -> None:
    sys.exit(asyncio.run(async_main()))


if __name__ == "__main__":
    main()
