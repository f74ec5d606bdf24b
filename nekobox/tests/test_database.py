"""
Tests for engine initialization and session management.
"""

import pytest
from sqlalchemy import func, inspect, select

from nekobox.common.db.session import get_session
from nekobox.domain.questions.orm import QuestionORM


async def count_rows(session_factory):
    async with get_session(session_factory) as session:
        return (await session.execute(select(func.count()).select_from(QuestionORM))).scalar_one()


@pytest.mark.asyncio
async def test_create_tables(engine):
    async with engine.connect() as conn:
        tables = await conn.run_sync(lambda sync_conn: inspect(sync_conn).get_table_names())
    assert "questions" in tables


@pytest.mark.asyncio
async def test_get_session_commits(session_factory):
    async with get_session(session_factory) as session:
        session.add(QuestionORM(user_id=1, content="hello", token="abcdef"))

    assert await count_rows(session_factory) == 1


@pytest.mark.asyncio
async def test_get_session_rolls_back_on_error(session_factory):
    with pytest.raises(RuntimeError):
        async with get_session(session_factory) as session:
            session.add(QuestionORM(user_id=1, content="hello", token="abcdef"))
            await session.flush()
            raise RuntimeError("handler failed")

    assert await count_rows(session_factory) == 0
