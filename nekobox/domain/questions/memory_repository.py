"""
Memory Question Repository Module

This module provides an in-memory implementation of the QuestionRepository
interface for development and testing purposes.
"""

import itertools
import logging
from dataclasses import replace
from typing import Callable, Dict, List, Optional

from nekobox.common.db.cursor import Cursor
from nekobox.common.utils import utcnow
from .model import (
    CreateQuestionOptions,
    GetQuestionsByAskUserIDOptions,
    GetQuestionsByUserIDOptions,
    GetQuestionsCountOptions,
    Question,
    UpdateQuestionCensorOptions,
)
from .repository import (
    QuestionNotExistError,
    QuestionRepository,
    TokenFactory,
    merge_censor_metadata,
)

# Setup logging
logger = logging.getLogger(__name__)


class MemoryQuestionRepository(QuestionRepository):
    """
    In-memory implementation of the QuestionRepository.

    Questions are kept in a dict keyed by ID. Returned entities are copies,
    so callers cannot change stored state without going through the
    repository.
    """

    def __init__(
        self,
        initial_data: Optional[List[Question]] = None,
        token_factory: Optional[TokenFactory] = None
    ):
        """
        Initialize the repository with optional initial data.

        Args:
            initial_data: Optional list of Question entities to initialize with;
                they must already carry IDs
            token_factory: Optional token generator
        """
        super().__init__(token_factory)
        self._questions: Dict[int, Question] = {}

        if initial_data:
            for question in initial_data:
                self._questions[question.id] = replace(question)

        next_id = max(self._questions, default=0) + 1
        self._ids = itertools.count(next_id)

    async def create(self, opts: CreateQuestionOptions) -> Question:
        now = utcnow()
        question = Question(
            id=next(self._ids),
            user_id=opts.user_id,
            content=opts.content,
            token=self._token_factory(),
            from_ip=opts.from_ip,
            asker_user_id=opts.asker_user_id,
            receive_reply_email=opts.receive_reply_email,
            created_at=now,
            updated_at=now,
        )
        self._questions[question.id] = question
        logger.debug(f"Created question {question.id} for user {opts.user_id}")
        return replace(question)

    def _get(self, question_id: int) -> Question:
        question = self._questions.get(question_id)
        if question is None:
            raise QuestionNotExistError(question_id)
        return question

    async def get_by_id(self, question_id: int) -> Question:
        return replace(self._get(question_id))

    def _get_by(self, cursor: Optional[Cursor], predicate: Callable[[Question], bool]) -> List[Question]:
        last_id = cursor.last_id if cursor is not None else None
        result = [
            question for question in self._questions.values()
            if predicate(question) and (last_id is None or question.id < last_id)
        ]
        result.sort(key=lambda q: (q.created_at, q.id), reverse=True)
        if cursor is not None:
            result = result[:cursor.limit]
        return [replace(question) for question in result]

    async def get_by_user_id(self, user_id: int, opts: GetQuestionsByUserIDOptions) -> List[Question]:
        return self._get_by(
            opts.cursor,
            lambda q: q.user_id == user_id and (not opts.filter_answered or q.is_answered)
        )

    async def get_by_ask_user_id(self, user_id: int, opts: GetQuestionsByAskUserIDOptions) -> List[Question]:
        return self._get_by(
            opts.cursor,
            lambda q: q.asker_user_id == user_id and (not opts.filter_answered or q.is_answered)
        )

    async def answer_by_id(self, question_id: int, answer: str) -> None:
        question = self._get(question_id)
        question.answer = answer
        question.updated_at = utcnow()

    async def delete_by_id(self, question_id: int) -> None:
        self._get(question_id)
        del self._questions[question_id]
        logger.debug(f"Deleted question {question_id}")

    async def update_censor(self, question_id: int, opts: UpdateQuestionCensorOptions) -> None:
        question = self._get(question_id)
        content_metadata, answer_metadata = merge_censor_metadata(question, opts)
        question.content_censor_metadata = content_metadata
        question.answer_censor_metadata = answer_metadata
        question.updated_at = utcnow()

    async def count(self, user_id: int, opts: GetQuestionsCountOptions) -> int:
        return sum(
            1 for q in self._questions.values()
            if q.user_id == user_id and (not opts.filter_answered or q.is_answered)
        )
