"""Service layer for business logic."""

from qanda.services.answer import AnswerService
from qanda.services.auth import AuthService
from qanda.services.question import QuestionService

__all__ = ["AnswerService", "AuthService", "QuestionService"]
