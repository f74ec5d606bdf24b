"""
Question domain module for NekoBox.

This module contains the domain model and repositories for handling
the questions left in users' boxes.
"""

from .censor import check_text_censor_response_valid
from .model import (
    Question,
    CreateQuestionOptions,
    GetQuestionsByUserIDOptions,
    GetQuestionsByAskUserIDOptions,
    UpdateQuestionCensorOptions,
    GetQuestionsCountOptions,
)
from .repository import QuestionRepository, QuestionNotExistError
from .sql_repository import SQLAlchemyQuestionRepository
from .memory_repository import MemoryQuestionRepository

__all__ = [
    'Question',
    'CreateQuestionOptions',
    'GetQuestionsByUserIDOptions',
    'GetQuestionsByAskUserIDOptions',
    'UpdateQuestionCensorOptions',
    'GetQuestionsCountOptions',
    'QuestionRepository',
    'QuestionNotExistError',
    'SQLAlchemyQuestionRepository',
    'MemoryQuestionRepository',
    'check_text_censor_response_valid',
]
