"""Repository layer for database operations."""

from qanda.repositories.answer import AnswerRepository
from qanda.repositories.question import QuestionRepository
from qanda.repositories.user import UserRepository

__all__ = ["AnswerRepository", "QuestionRepository", "UserRepository"]
