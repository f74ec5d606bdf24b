"""
Tests specific to the SQLAlchemy question repository: storage failures,
cancellation, persistence across sessions and the table mapping.
"""

import asyncio
import json
import logging

import pytest
from sqlalchemy import select

from nekobox.common.db.cursor import Cursor
from nekobox.common.db.session import create_session_factory, get_session
from nekobox.common.exceptions import DatabaseError, NotFoundError
from nekobox.domain.questions import (
    CreateQuestionOptions,
    GetQuestionsByUserIDOptions,
    GetQuestionsCountOptions,
    SQLAlchemyQuestionRepository,
    UpdateQuestionCensorOptions,
)
from nekobox.domain.questions.orm import QuestionORM


class StalledSession:
    """Session stand-in whose queries never complete."""

    def __init__(self, started):
        self.started = started
        self.closed = False

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc_info):
        self.closed = True
        return False

    async def _stall(self, *args, **kwargs):
        self.started.set()
        await asyncio.Event().wait()

    get = _stall
    execute = _stall


@pytest.fixture
def broken_repository(bare_engine):
    """Repository whose database has no question table."""
    return SQLAlchemyQuestionRepository(create_session_factory(bare_engine))


class TestStorageFailures:

    @pytest.mark.asyncio
    async def test_create_wraps_storage_error(self, broken_repository):
        with pytest.raises(DatabaseError) as exc_info:
            await broken_repository.create(CreateQuestionOptions(user_id=1, content="hello"))

        assert "create question" in str(exc_info.value)
        assert exc_info.value.original_exception is not None

    @pytest.mark.asyncio
    async def test_get_by_id_failure_is_not_not_found(self, broken_repository):
        with pytest.raises(DatabaseError) as exc_info:
            await broken_repository.get_by_id(1)

        assert not isinstance(exc_info.value, NotFoundError)
        assert "get question by ID" in str(exc_info.value)

    @pytest.mark.asyncio
    async def test_lookup_failure_surfaces_from_mutations(self, broken_repository):
        with pytest.raises(DatabaseError):
            await broken_repository.answer_by_id(1, "answer")
        with pytest.raises(DatabaseError):
            await broken_repository.delete_by_id(1)
        with pytest.raises(DatabaseError):
            await broken_repository.update_censor(1, UpdateQuestionCensorOptions())

    @pytest.mark.asyncio
    async def test_queries_wrap_storage_error(self, broken_repository):
        with pytest.raises(DatabaseError):
            await broken_repository.get_by_user_id(1, GetQuestionsByUserIDOptions(cursor=Cursor(page_size=3)))
        with pytest.raises(DatabaseError):
            await broken_repository.count(1, GetQuestionsCountOptions())

    @pytest.mark.asyncio
    async def test_failure_is_logged_once(self, broken_repository, caplog):
        caplog.set_level(logging.DEBUG, logger="nekobox")

        with pytest.raises(DatabaseError):
            await broken_repository.count(1, GetQuestionsCountOptions())

        errors = [r for r in caplog.records if r.levelno >= logging.ERROR]
        assert len(errors) == 1
        assert "count questions" in errors[0].getMessage()


class TestCancellation:

    @pytest.mark.asyncio
    async def test_cancel_in_flight_query(self):
        started = asyncio.Event()
        sessions = []

        def session_factory():
            session = StalledSession(started)
            sessions.append(session)
            return session

        repository = SQLAlchemyQuestionRepository(session_factory)
        task = asyncio.create_task(repository.get_by_id(1))
        await started.wait()
        task.cancel()

        with pytest.raises(asyncio.CancelledError):
            await task
        assert sessions[0].closed

    @pytest.mark.asyncio
    async def test_deadline_raises_timeout(self):
        repository = SQLAlchemyQuestionRepository(lambda: StalledSession(asyncio.Event()))

        with pytest.raises(asyncio.TimeoutError) as exc_info:
            await asyncio.wait_for(repository.count(1, GetQuestionsCountOptions()), timeout=0.05)

        assert not isinstance(exc_info.value, DatabaseError)

    @pytest.mark.asyncio
    async def test_cancelled_mutation_skips_write(self):
        started = asyncio.Event()
        sessions = []

        def session_factory():
            session = StalledSession(started)
            sessions.append(session)
            return session

        repository = SQLAlchemyQuestionRepository(session_factory)
        task = asyncio.create_task(repository.answer_by_id(1, "too late"))
        await started.wait()
        task.cancel()

        with pytest.raises(asyncio.CancelledError):
            await task
        # Only the lookup session was opened.
        assert len(sessions) == 1


class TestPersistence:

    @pytest.mark.asyncio
    async def test_rows_are_visible_to_new_repositories(self, session_factory):
        writer = SQLAlchemyQuestionRepository(session_factory)
        question = await writer.create(CreateQuestionOptions(user_id=3, content="still there?"))

        reader = SQLAlchemyQuestionRepository(session_factory)
        stored = await reader.get_by_id(question.id)

        assert stored.content == "still there?"
        assert stored.created_at == question.created_at

    @pytest.mark.asyncio
    async def test_censor_pass_is_not_a_column(self, session_factory):
        repository = SQLAlchemyQuestionRepository(session_factory)
        question = await repository.create(CreateQuestionOptions(user_id=3, content="hi"))
        await repository.update_censor(question.id, UpdateQuestionCensorOptions(
            content_censor_metadata=json.dumps({"source_name": "x", "pass": True}),
        ))

        assert "content_censor_pass" not in QuestionORM.__table__.columns
        async with get_session(session_factory) as session:
            row = (await session.execute(
                select(QuestionORM.content_censor_metadata).where(QuestionORM.id == question.id)
            )).scalar_one()
        assert json.loads(row)["pass"] is True

    @pytest.mark.asyncio
    async def test_update_censor_bumps_updated_at(self, session_factory):
        repository = SQLAlchemyQuestionRepository(session_factory)
        question = await repository.create(CreateQuestionOptions(user_id=3, content="hi"))
        await asyncio.sleep(0.01)

        await repository.update_censor(question.id, UpdateQuestionCensorOptions())

        stored = await repository.get_by_id(question.id)
        assert stored.updated_at > question.updated_at
        assert stored.created_at == question.created_at
