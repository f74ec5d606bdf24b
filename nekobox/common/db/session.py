"""
Database Session Management

This module builds the async SQLAlchemy engine and session factory. Both
are created explicitly by the application and handed to the repositories
that need them.
"""

from contextlib import asynccontextmanager
from typing import AsyncIterator, Dict, Any

from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, create_async_engine
from sqlalchemy.orm import sessionmaker

from nekobox.common.logger import app_logger

# Set up logging
logger = app_logger.getChild("db.session")


def get_engine_kwargs(db_settings: Dict[str, Any]) -> Dict[str, Any]:
    """
    Get engine keyword arguments based on database type.
    Only server databases get connection pool options.
    """
    kwargs: Dict[str, Any] = {"echo": db_settings.get("echo", False)}

    if db_settings["db_type"] in ("postgresql", "mysql"):
        kwargs.update({
            "pool_size": db_settings["pool_size"],
            "max_overflow": db_settings["max_overflow"],
            "pool_timeout": db_settings["pool_timeout"],
            "pool_pre_ping": True,
            "pool_recycle": 300,  # Recycle connections every 5 minutes
        })

    return kwargs


def create_engine(db_settings: Dict[str, Any], **overrides: Any) -> AsyncEngine:
    """
    Create the async engine described by ``db_settings``.

    Args:
        db_settings: Output of ``get_database_settings``
        **overrides: Extra keyword arguments for ``create_async_engine``
    """
    kwargs = get_engine_kwargs(db_settings)
    kwargs.update(overrides)
    return create_async_engine(db_settings["database_url"], **kwargs)


def create_session_factory(engine: AsyncEngine) -> sessionmaker:
    """Create an async session factory bound to ``engine``."""
    return sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )


@asynccontextmanager
async def get_session(session_factory: sessionmaker) -> AsyncIterator[AsyncSession]:
    """
    Open a session that commits on success and rolls back on error.

    Example:
        async with get_session(factory) as session:
            session.add(obj)
    """
    session = session_factory()
    try:
        yield session
        await session.commit()
    except Exception as e:
        await session.rollback()
        logger.error(f"Database session error: {e}")
        raise
    finally:
        await session.close()
