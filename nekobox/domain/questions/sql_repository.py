"""
SQLAlchemy Question Repository Module

Repository implementation backed by an async SQLAlchemy session factory.
Every operation opens its own session. Operations that look a question up
before writing do so in separate sessions with no version check, so
concurrent writers to the same question resolve as last write wins.
"""

from typing import Any, List, Optional

from sqlalchemy import delete as sql_delete, func, select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import sessionmaker

from nekobox.common.db.cursor import Cursor
from nekobox.common.exceptions import DatabaseError
from nekobox.common.logger import get_logger
from nekobox.common.utils import utcnow
from .model import (
    CreateQuestionOptions,
    GetQuestionsByAskUserIDOptions,
    GetQuestionsByUserIDOptions,
    GetQuestionsCountOptions,
    Question,
    UpdateQuestionCensorOptions,
)
from .orm import QuestionORM
from .repository import (
    QuestionNotExistError,
    QuestionRepository,
    TokenFactory,
    merge_censor_metadata,
)

# Set up logger
logger = get_logger(__name__)


class SQLAlchemyQuestionRepository(QuestionRepository):
    """
    Question repository using SQLAlchemy Async.

    Args:
        session_factory: Factory producing ``AsyncSession`` objects
        token_factory: Optional token generator, mainly for tests
    """

    def __init__(self, session_factory: sessionmaker, token_factory: Optional[TokenFactory] = None):
        super().__init__(token_factory)
        self._session_factory = session_factory
        logger.info("Initialized SQLAlchemyQuestionRepository")

    def _map_orm_to_domain(self, orm_question: QuestionORM) -> Question:
        return Question(**orm_question.to_dict())

    def _storage_error(self, operation: str, error: Exception) -> DatabaseError:
        logger.error(f"Error during {operation}: {error}", exc_info=True)
        return DatabaseError(operation, original_exception=error)

    async def create(self, opts: CreateQuestionOptions) -> Question:
        now = utcnow()
        orm_question = QuestionORM(
            from_ip=opts.from_ip,
            user_id=opts.user_id,
            token=self._token_factory(),
            content=opts.content,
            answer="",
            receive_reply_email=opts.receive_reply_email,
            asker_user_id=opts.asker_user_id,
            created_at=now,
            updated_at=now,
        )
        try:
            async with self._session_factory() as session:
                async with session.begin():
                    session.add(orm_question)
        except SQLAlchemyError as e:
            raise self._storage_error("create question", e)

        logger.debug(f"Created question {orm_question.id} for user {opts.user_id}")
        return self._map_orm_to_domain(orm_question)

    async def get_by_id(self, question_id: int) -> Question:
        try:
            async with self._session_factory() as session:
                orm_question = await session.get(QuestionORM, question_id)
        except SQLAlchemyError as e:
            raise self._storage_error("get question by ID", e)

        if orm_question is None:
            raise QuestionNotExistError(question_id)
        return self._map_orm_to_domain(orm_question)

    async def _get_by(self, cursor: Optional[Cursor], *conditions: Any) -> List[Question]:
        stmt = select(QuestionORM).where(*conditions)

        if cursor is not None:
            # Ordered newest first, so the next page holds the lower IDs.
            last_id = cursor.last_id
            if last_id is not None:
                stmt = stmt.where(QuestionORM.id < last_id)
            stmt = stmt.limit(cursor.limit)

        stmt = stmt.order_by(QuestionORM.created_at.desc(), QuestionORM.id.desc())
        try:
            async with self._session_factory() as session:
                result = await session.execute(stmt)
                orm_questions = result.scalars().all()
        except SQLAlchemyError as e:
            raise self._storage_error("get questions by page", e)
        return [self._map_orm_to_domain(q) for q in orm_questions]

    async def get_by_user_id(self, user_id: int, opts: GetQuestionsByUserIDOptions) -> List[Question]:
        conditions = [QuestionORM.user_id == user_id]
        if opts.filter_answered:
            conditions.append(QuestionORM.answer != "")
        return await self._get_by(opts.cursor, *conditions)

    async def get_by_ask_user_id(self, user_id: int, opts: GetQuestionsByAskUserIDOptions) -> List[Question]:
        conditions = [QuestionORM.asker_user_id == user_id]
        if opts.filter_answered:
            conditions.append(QuestionORM.answer != "")
        return await self._get_by(opts.cursor, *conditions)

    async def answer_by_id(self, question_id: int, answer: str) -> None:
        await self.get_by_id(question_id)

        try:
            async with self._session_factory() as session:
                async with session.begin():
                    await session.execute(
                        update(QuestionORM)
                        .where(QuestionORM.id == question_id)
                        .values(answer=answer)
                    )
        except SQLAlchemyError as e:
            raise self._storage_error("update question answer", e)

    async def delete_by_id(self, question_id: int) -> None:
        await self.get_by_id(question_id)

        try:
            async with self._session_factory() as session:
                async with session.begin():
                    await session.execute(
                        sql_delete(QuestionORM).where(QuestionORM.id == question_id)
                    )
        except SQLAlchemyError as e:
            raise self._storage_error("delete question", e)
        logger.debug(f"Deleted question {question_id}")

    async def update_censor(self, question_id: int, opts: UpdateQuestionCensorOptions) -> None:
        question = await self.get_by_id(question_id)
        content_metadata, answer_metadata = merge_censor_metadata(question, opts)

        # Written unconditionally; updated_at records the callback.
        try:
            async with self._session_factory() as session:
                async with session.begin():
                    await session.execute(
                        update(QuestionORM)
                        .where(QuestionORM.id == question_id)
                        .values(
                            content_censor_metadata=content_metadata,
                            answer_censor_metadata=answer_metadata,
                        )
                    )
        except SQLAlchemyError as e:
            raise self._storage_error("update question censor metadata", e)

    async def count(self, user_id: int, opts: GetQuestionsCountOptions) -> int:
        stmt = select(func.count()).select_from(QuestionORM).where(QuestionORM.user_id == user_id)
        if opts.filter_answered:
            stmt = stmt.where(QuestionORM.answer != "")

        try:
            async with self._session_factory() as session:
                result = await session.execute(stmt)
                return result.scalar_one()
        except SQLAlchemyError as e:
            raise self._storage_error("count questions", e)
