"""
Question Repository Module

This module defines the repository contract for accessing and storing
Question entities, along with the helpers shared by its implementations.
"""

import abc
from typing import Callable, List, Optional, Tuple

from nekobox.common.exceptions import NotFoundError
from nekobox.common.utils import random_string
from nekobox.config import settings
from .censor import check_text_censor_response_valid, normalize_blob
from .model import (
    CreateQuestionOptions,
    GetQuestionsByAskUserIDOptions,
    GetQuestionsByUserIDOptions,
    GetQuestionsCountOptions,
    Question,
    UpdateQuestionCensorOptions,
)

TokenFactory = Callable[[], str]


class QuestionNotExistError(NotFoundError):
    """Raised when no question matches the requested ID."""

    def __init__(self, question_id: int):
        super().__init__("Question", question_id)


def generate_token() -> str:
    """Random alphanumeric token handed to the asker at creation."""
    return random_string(settings.QUESTION_TOKEN_LENGTH)


def merge_censor_metadata(question: Question, opts: UpdateQuestionCensorOptions) -> Tuple[Optional[str], Optional[str]]:
    """
    Pick the metadata to store after a moderation callback.

    Each candidate replaces the stored blob only if it is a valid censor
    response; otherwise the stored blob is kept.

    Returns:
        (content_censor_metadata, answer_censor_metadata)
    """
    content_metadata = question.content_censor_metadata
    if check_text_censor_response_valid(opts.content_censor_metadata):
        content_metadata = normalize_blob(opts.content_censor_metadata)

    answer_metadata = question.answer_censor_metadata
    if check_text_censor_response_valid(opts.answer_censor_metadata):
        answer_metadata = normalize_blob(opts.answer_censor_metadata)

    return content_metadata, answer_metadata


class QuestionRepository(abc.ABC):
    """
    Abstract base class for question repositories.

    Lookups by ID raise ``QuestionNotExistError`` when the question is
    missing and ``DatabaseError`` for any other storage failure.
    """

    def __init__(self, token_factory: Optional[TokenFactory] = None):
        self._token_factory = token_factory or generate_token

    @abc.abstractmethod
    async def create(self, opts: CreateQuestionOptions) -> Question:
        """
        Create a question with a freshly generated token.

        Content is stored as given; validation belongs to the caller.
        """

    @abc.abstractmethod
    async def get_by_id(self, question_id: int) -> Question:
        """
        Get a question by its ID.

        Raises:
            QuestionNotExistError: If no question has this ID
        """

    @abc.abstractmethod
    async def get_by_user_id(self, user_id: int, opts: GetQuestionsByUserIDOptions) -> List[Question]:
        """
        Get a page of the questions received by a user, newest first.

        Args:
            user_id: The recipient
            opts: Cursor and whether to keep answered questions only
        """

    @abc.abstractmethod
    async def get_by_ask_user_id(self, user_id: int, opts: GetQuestionsByAskUserIDOptions) -> List[Question]:
        """Get a page of the questions asked by a user, newest first."""

    @abc.abstractmethod
    async def answer_by_id(self, question_id: int, answer: str) -> None:
        """
        Set the answer of a question.

        An existing answer is overwritten.

        Raises:
            QuestionNotExistError: If no question has this ID
        """

    @abc.abstractmethod
    async def delete_by_id(self, question_id: int) -> None:
        """
        Permanently delete a question.

        Raises:
            QuestionNotExistError: If no question has this ID
        """

    @abc.abstractmethod
    async def update_censor(self, question_id: int, opts: UpdateQuestionCensorOptions) -> None:
        """
        Attach moderation responses to a question.

        Invalid candidates are ignored and the stored metadata is kept. The
        row is written even when nothing changed.

        Raises:
            QuestionNotExistError: If no question has this ID
        """

    @abc.abstractmethod
    async def count(self, user_id: int, opts: GetQuestionsCountOptions) -> int:
        """Count the questions received by a user."""
