"""Answer service keeping question answer counts and best answers in step."""

from collections.abc import Mapping
from typing import Any

from loguru import logger
from sqlalchemy.ext.asyncio import AsyncSession

from qanda.exceptions import NotFoundError
from qanda.models.answer import Answer
from qanda.models.question import Question
from qanda.models.user import User
from qanda.policies import Gate, gate
from qanda.repositories.answer import AnswerRepository
from qanda.repositories.question import QuestionRepository
from qanda.schemas.answer import AnswerForm
from qanda.schemas.forms import validate_form


class AnswerService:
    """Post, delete, and accept answers."""

    def __init__(self, policy_gate: Gate | None = None) -> None:
        self.gate = policy_gate or gate

    async def post_answer(
        self,
        session: AsyncSession,
        user: User,
        question_id: int,
        data: Mapping[str, Any],
    ) -> Answer:
        """Validate and store an answer, counting it against the question."""
        question = await QuestionRepository.get_by_id(session, question_id)
        if question is None:
            raise NotFoundError(resource="Question", resource_id=question_id)

        form = validate_form(AnswerForm, data)

        answer = await AnswerRepository.create(
            session=session,
            question_id=question.id,
            user_id=user.id,
            body=form.body,
        )
        await QuestionRepository.adjust_answers_count(session, question.id, 1)

        logger.info(
            "Answer posted",
            question_id=question.id,
            answer_id=answer.id,
            user_id=user.id,
        )
        return answer

    async def delete_answer(
        self,
        session: AsyncSession,
        user: User,
        question_id: int,
        answer_id: int,
    ) -> Question:
        """Delete the user's own answer and return its question."""
        answer = await AnswerRepository.get_by_id_and_question_id(
            session=session,
            answer_id=answer_id,
            question_id=question_id,
        )
        if answer is None:
            raise NotFoundError(resource="Answer", resource_id=answer_id)

        self.gate.authorize(user, "delete", answer)

        question = answer.question
        if question.best_answer_id == answer.id:
            await QuestionRepository.set_best_answer(session, question.id, None)
        await AnswerRepository.delete(session, answer)
        await QuestionRepository.adjust_answers_count(session, question.id, -1)

        logger.info(
            "Answer deleted",
            question_id=question.id,
            answer_id=answer_id,
            user_id=user.id,
        )
        return question

    async def accept_answer(
        self,
        session: AsyncSession,
        user: User,
        answer_id: int,
    ) -> Question:
        """Mark an answer as the best one for its question."""
        answer = await AnswerRepository.get_by_id(session, answer_id)
        if answer is None:
            raise NotFoundError(resource="Answer", resource_id=answer_id)

        self.gate.authorize(user, "accept", answer)

        question = answer.question
        await QuestionRepository.set_best_answer(session, question.id, answer.id)

        logger.info(
            "Answer accepted",
            question_id=question.id,
            answer_id=answer.id,
            user_id=user.id,
        )
        return question
