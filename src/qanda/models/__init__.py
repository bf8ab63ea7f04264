"""Database models package."""

from qanda.models.answer import Answer
from qanda.models.base import Base
from qanda.models.question import Question, QuestionStatus
from qanda.models.user import User

__all__ = ["Answer", "Base", "Question", "QuestionStatus", "User"]
