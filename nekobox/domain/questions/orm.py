"""
SQLAlchemy ORM model for questions.

Column names match the fields of the ``Question`` domain entity. The
moderation pass flags are not columns; they are derived from the stored
metadata when the row is read.
"""

from sqlalchemy import Column, DateTime, Index, Integer, String, Text

from nekobox.common.utils import utcnow
from nekobox.database.base import ModelBase


class QuestionORM(ModelBase):
    """Table mapping for questions."""
    __tablename__ = 'questions'

    id = Column(Integer, primary_key=True, autoincrement=True)
    created_at = Column(DateTime, default=utcnow, nullable=False, index=True)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow, nullable=False)
    from_ip = Column(String(255), nullable=False, default="")
    user_id = Column(Integer, nullable=False)
    content = Column(Text, nullable=False)
    content_censor_metadata = Column(Text, nullable=True)
    token = Column(String(32), nullable=False)
    answer = Column(Text, nullable=False, default="")
    answer_censor_metadata = Column(Text, nullable=True)
    receive_reply_email = Column(String(255), nullable=False, default="")
    asker_user_id = Column(Integer, nullable=False, default=0, index=True)

    __table_args__ = (
        Index('idx_question_user_id', user_id),
    )
