"""
Database initialization and connection management.

This module provides functions for:
1. Creating and checking the async engine
2. Creating the tables of the registered models
3. Disposing of the engine's connection pool
"""

from typing import Any, Dict, Optional

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncEngine

from nekobox.common.db.connection import get_database_settings
from nekobox.common.db.session import create_engine
from nekobox.common.logger import app_logger
from nekobox.database.base import Base

# Setup module logger
logger = app_logger.getChild("database.init_db")


async def initialize_database(
    db_settings: Optional[Dict[str, Any]] = None,
    **engine_overrides: Any
) -> AsyncEngine:
    """
    Create the async database engine and check that it can connect.

    Args:
        db_settings: Output of ``get_database_settings``; loaded from the
            process settings when omitted
        **engine_overrides: Extra keyword arguments for the engine

    Returns:
        AsyncEngine instance
    """
    db_settings = db_settings or get_database_settings()
    logger.info(f"Initializing {db_settings['db_type']} database engine")

    engine = create_engine(db_settings, **engine_overrides)
    try:
        async with engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
    except Exception as e:
        logger.error(f"Failed to initialize async database: {str(e)}")
        await engine.dispose()
        raise

    logger.info("Database engine initialized successfully")
    return engine


async def create_tables(engine: AsyncEngine) -> None:
    """Create every table registered on the declarative base."""
    # Register the mappings on Base.metadata
    import nekobox.domain.questions.orm  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Database tables created")


async def close_database(engine: AsyncEngine) -> None:
    """Close the database engine and all connections."""
    try:
        await engine.dispose()
        logger.info("Database engine closed successfully")
    except Exception as e:
        logger.error(f"Error closing database engine: {str(e)}")
        raise
