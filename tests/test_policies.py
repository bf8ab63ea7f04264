"""Tests for ownership policies and the gate."""

import pytest

from qanda.exceptions import AuthorizationError
from qanda.models import Answer, Question, User
from qanda.policies import AnswerPolicy, Gate, QuestionPolicy, gate

OWNER = User(id=1, name="Owner", email="owner@example.com", password_hash="x")
STRANGER = User(id=2, name="Stranger", email="stranger@example.com", password_hash="x")


def _question(answers_count: int = 0) -> Question:
    return Question(id=10, user_id=OWNER.id, answers_count=answers_count)


class TestQuestionPolicy:
    """Update and delete are owner-only; delete also needs zero answers."""

    def test_owner_can_update(self) -> None:
        assert QuestionPolicy().update(OWNER, _question())

    def test_stranger_cannot_update(self) -> None:
        assert not QuestionPolicy().update(STRANGER, _question())

    def test_owner_can_delete_unanswered_question(self) -> None:
        assert QuestionPolicy().delete(OWNER, _question(answers_count=0))

    @pytest.mark.parametrize("answers_count", [1, 3])
    def test_owner_cannot_delete_answered_question(self, answers_count: int) -> None:
        assert not QuestionPolicy().delete(OWNER, _question(answers_count))

    @pytest.mark.parametrize("answers_count", [0, 1])
    def test_stranger_can_never_delete(self, answers_count: int) -> None:
        assert not QuestionPolicy().delete(STRANGER, _question(answers_count))


class TestAnswerPolicy:
    """Answers belong to their author; acceptance to the question owner."""

    def test_author_can_delete_own_answer(self) -> None:
        answer = Answer(id=3, user_id=STRANGER.id, question_id=10)

        assert AnswerPolicy().delete(STRANGER, answer)
        assert not AnswerPolicy().delete(OWNER, answer)

    def test_only_question_owner_can_accept(self) -> None:
        answer = Answer(id=3, user_id=STRANGER.id, question_id=10)
        answer.question = _question(answers_count=1)

        assert AnswerPolicy().accept(OWNER, answer)
        assert not AnswerPolicy().accept(STRANGER, answer)


class TestGate:
    """Tests for gate dispatch."""

    def test_allows_dispatches_by_resource_type(self) -> None:
        assert gate.allows(OWNER, "update", _question())
        assert gate.denies(STRANGER, "update", _question())

    def test_anonymous_user_is_denied(self) -> None:
        assert not gate.allows(None, "update", _question())

    def test_unknown_ability_is_denied(self) -> None:
        assert not gate.allows(OWNER, "publish", _question())

    def test_unregistered_resource_is_denied(self) -> None:
        assert not Gate().allows(OWNER, "update", _question())

    def test_authorize_raises_for_denied_ability(self) -> None:
        with pytest.raises(AuthorizationError) as exc_info:
            gate.authorize(STRANGER, "delete", _question())

        assert exc_info.value.error_code == "FORBIDDEN"
        assert exc_info.value.details["ability"] == "delete"
        assert exc_info.value.details["resource"] == "Question"

    def test_authorize_passes_for_allowed_ability(self) -> None:
        gate.authorize(OWNER, "delete", _question())
