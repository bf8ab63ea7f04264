"""Ownership policies and the gate that dispatches to them.

A policy is a plain class with one boolean method per ability, each taking
``(user, resource)``. The gate picks the policy registered for the resource's
type and calls the method named after the ability.
"""

from typing import Any

from loguru import logger

from qanda.exceptions import AuthorizationError
from qanda.models.answer import Answer
from qanda.models.question import Question
from qanda.models.user import User


class QuestionPolicy:
    """Who may change a question."""

    def update(self, user: User, question: Question) -> bool:
        return user.id == question.user_id

    def delete(self, user: User, question: Question) -> bool:
        return user.id == question.user_id and question.answers_count < 1

    def accept_answer(self, user: User, question: Question) -> bool:
        return user.id == question.user_id


class AnswerPolicy:
    """Who may change an answer or accept it as the best one."""

    def update(self, user: User, answer: Answer) -> bool:
        return user.id == answer.user_id

    def delete(self, user: User, answer: Answer) -> bool:
        return user.id == answer.user_id

    def accept(self, user: User, answer: Answer) -> bool:
        return QuestionPolicy().accept_answer(user, answer.question)


class Gate:
    """Registry of policies keyed by model class."""

    def __init__(self) -> None:
        self._policies: dict[type, Any] = {}

    def policy(self, model: type, policy: Any) -> None:
        self._policies[model] = policy

    def allows(self, user: User | None, ability: str, resource: Any) -> bool:
        """Return whether ``user`` may perform ``ability`` on ``resource``.

        Anonymous users, unregistered resource types and unknown abilities
        are always denied.
        """
        if user is None:
            return False
        policy = self._policies.get(type(resource))
        check = getattr(policy, ability, None) if policy is not None else None
        if check is None:
            return False
        return bool(check(user, resource))

    def denies(self, user: User | None, ability: str, resource: Any) -> bool:
        return not self.allows(user, ability, resource)

    def authorize(self, user: User | None, ability: str, resource: Any) -> None:
        """Raise AuthorizationError unless the ability is allowed."""
        if self.allows(user, ability, resource):
            return
        logger.info(
            "Authorization denied",
            ability=ability,
            resource=type(resource).__name__,
            resource_id=getattr(resource, "id", None),
            user_id=user.id if user is not None else None,
        )
        raise AuthorizationError(
            ability=ability,
            resource=type(resource).__name__,
            details={"resource_id": getattr(resource, "id", None)},
        )


gate = Gate()
gate.policy(Question, QuestionPolicy())
gate.policy(Answer, AnswerPolicy())
