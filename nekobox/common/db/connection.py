"""
Database Configuration Loading

This module turns application settings into the connection URL and pool
options used to build the async engine.
"""

import urllib.parse
from typing import Dict, Any, Optional

from nekobox.common.exceptions import ConfigurationError
from nekobox.common.logger import app_logger
from nekobox.config import Settings, settings as default_settings

# Module logger
logger = app_logger.getChild("db.config")

# Async drivers per database type
DRIVERS = {
    "postgresql": "postgresql+asyncpg",
    "mysql": "mysql+aiomysql",
    "sqlite": "sqlite+aiosqlite",
}

DEFAULT_PORTS = {
    "postgresql": 5432,
    "mysql": 3306,
}


def _infer_db_type(database_url: str) -> str:
    scheme = database_url.split(":", 1)[0]
    return scheme.split("+", 1)[0]


def get_database_settings(settings: Optional[Settings] = None) -> Dict[str, Any]:
    """
    Load database connection settings.

    A DATABASE_URL takes precedence; otherwise the URL is constructed from
    the individual DB_* settings.

    Args:
        settings: Settings to read from, defaults to the process settings

    Returns:
        A dictionary containing the connection URL, database type and pool options.

    Raises:
        ConfigurationError: If DB_TYPE names an unsupported database
    """
    settings = settings or default_settings
    db_settings: Dict[str, Any] = {
        "pool_size": settings.DB_POOL_SIZE,
        "max_overflow": settings.DB_MAX_OVERFLOW,
        "pool_timeout": settings.DB_POOL_TIMEOUT,
        "echo": settings.SQL_ECHO,
    }

    if settings.DATABASE_URL:
        logger.info("Using direct DATABASE_URL from settings.")
        db_settings["database_url"] = settings.DATABASE_URL
        db_settings["db_type"] = _infer_db_type(settings.DATABASE_URL)
        return db_settings

    db_type = settings.DB_TYPE.lower()
    if db_type not in DRIVERS:
        logger.error(f"Unsupported DB_TYPE: {db_type}")
        raise ConfigurationError(f"Unsupported database type: {db_type}", config_key="DB_TYPE")

    if db_type == "sqlite":
        database_url = f"{DRIVERS[db_type]}:///{settings.DB_PATH}"
    else:
        user = urllib.parse.quote_plus(settings.DB_USER)
        password = urllib.parse.quote_plus(settings.DB_PASSWORD)
        port = settings.DB_PORT or DEFAULT_PORTS[db_type]
        database_url = f"{DRIVERS[db_type]}://{user}:{password}@{settings.DB_HOST}:{port}/{settings.DB_NAME}"

    db_settings["database_url"] = database_url
    db_settings["db_type"] = db_type
    logger.info(f"Constructed database URL for {db_type}")
    return db_settings
