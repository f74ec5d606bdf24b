"""
Question Domain Model Module

This module defines the question entity returned by the repositories and
the option objects accepted by their operations.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, Optional

from nekobox.common.db.cursor import Cursor
from nekobox.common.utils import utcnow
from .censor import CensorBlob, censor_pass


@dataclass
class Question:
    """
    A question left in a user's box.

    Attributes:
        id: System-assigned sequential identifier
        user_id: Recipient who owns the question
        content: Text supplied by the asker
        token: Random identifier assigned at creation, used to answer
            without signing in
        answer: Empty until the recipient answers
        from_ip: Address the question was submitted from
        asker_user_id: Asker's user ID, 0 for anonymous askers
        receive_reply_email: Address notified when the question is answered
        content_censor_metadata: Raw moderation response for the content
        answer_censor_metadata: Raw moderation response for the answer
        created_at: When the question was created
        updated_at: When the row was last written
    """
    id: Optional[int]
    user_id: int
    content: str
    token: str
    answer: str = ""
    from_ip: str = ""
    asker_user_id: int = 0
    receive_reply_email: str = ""
    content_censor_metadata: Optional[str] = None
    answer_censor_metadata: Optional[str] = None
    created_at: datetime = field(default_factory=utcnow)
    updated_at: datetime = field(default_factory=utcnow)

    @property
    def content_censor_pass(self) -> bool:
        return censor_pass(self.content_censor_metadata)

    @property
    def answer_censor_pass(self) -> bool:
        return censor_pass(self.answer_censor_metadata)

    @property
    def is_answered(self) -> bool:
        return self.answer != ""

    def to_dict(self) -> Dict[str, Any]:
        """
        Public representation of the question.

        Provenance, token and moderation fields are internal and are never
        included.
        """
        return {
            'id': self.id,
            'created_at': self.created_at.isoformat() if self.created_at else None,
            'content': self.content,
            'answer': self.answer,
        }


@dataclass
class CreateQuestionOptions:
    user_id: int
    content: str
    from_ip: str = ""
    receive_reply_email: str = ""
    asker_user_id: int = 0


@dataclass
class GetQuestionsByUserIDOptions:
    cursor: Optional[Cursor] = None
    filter_answered: bool = False


@dataclass
class GetQuestionsByAskUserIDOptions:
    cursor: Optional[Cursor] = None
    filter_answered: bool = False


@dataclass
class UpdateQuestionCensorOptions:
    content_censor_metadata: CensorBlob = None
    answer_censor_metadata: CensorBlob = None


@dataclass
class GetQuestionsCountOptions:
    filter_answered: bool = False
