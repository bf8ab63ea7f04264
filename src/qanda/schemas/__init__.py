"""Pydantic schemas for QandA forms and responses."""

from qanda.schemas.answer import AnswerForm
from qanda.schemas.auth import LoginForm, RegisterForm
from qanda.schemas.common import HealthResponse
from qanda.schemas.forms import validate_form
from qanda.schemas.question import QuestionForm

__all__ = [
    "AnswerForm",
    "HealthResponse",
    "LoginForm",
    "QuestionForm",
    "RegisterForm",
    "validate_form",
]
