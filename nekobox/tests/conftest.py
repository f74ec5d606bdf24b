"""
Shared fixtures for the NekoBox test suite.

SQL-backed fixtures use an in-memory SQLite database through aiosqlite. A
StaticPool keeps the single connection alive so every session sees the
same database.
"""

import pytest
import pytest_asyncio
from sqlalchemy.pool import StaticPool

from nekobox.common.db.session import create_session_factory
from nekobox.database.init_db import close_database, create_tables, initialize_database
from nekobox.domain.questions import MemoryQuestionRepository, SQLAlchemyQuestionRepository

TEST_DB_SETTINGS = {
    "database_url": "sqlite+aiosqlite:///:memory:",
    "db_type": "sqlite",
    "echo": False,
}


async def _create_engine():
    return await initialize_database(
        TEST_DB_SETTINGS,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )


@pytest_asyncio.fixture
async def engine():
    """Engine for an empty database with the question table created."""
    test_engine = await _create_engine()
    await create_tables(test_engine)
    yield test_engine
    await close_database(test_engine)


@pytest_asyncio.fixture
async def bare_engine():
    """Engine for a database without any tables."""
    test_engine = await _create_engine()
    yield test_engine
    await close_database(test_engine)


@pytest.fixture
def session_factory(engine):
    return create_session_factory(engine)


@pytest_asyncio.fixture(params=["sqlalchemy", "memory"])
async def repository(request):
    """Each repository implementation, starting empty."""
    if request.param == "memory":
        yield MemoryQuestionRepository()
        return

    test_engine = await _create_engine()
    await create_tables(test_engine)
    yield SQLAlchemyQuestionRepository(create_session_factory(test_engine))
    await close_database(test_engine)
