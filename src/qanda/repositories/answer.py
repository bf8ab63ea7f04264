"""Repository for answer database operations."""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from qanda.models.answer import Answer


class AnswerRepository:
    """Handle answer persistence operations."""

    @staticmethod
    async def create(
        session: AsyncSession,
        question_id: int,
        user_id: int,
        body: str,
    ) -> Answer:
        """Create a new answer for a question."""
        answer = Answer(question_id=question_id, user_id=user_id, body=body)
        session.add(answer)
        await session.flush()
        await session.refresh(answer)
        return answer

    @staticmethod
    async def get_by_id(session: AsyncSession, answer_id: int) -> Answer | None:
        """Retrieve an answer with its question loaded."""
        result = await session.execute(
            select(Answer)
            .where(Answer.id == answer_id)
            .options(selectinload(Answer.question))
        )
        return result.scalar_one_or_none()

    @staticmethod
    async def get_by_id_and_question_id(
        session: AsyncSession,
        answer_id: int,
        question_id: int,
    ) -> Answer | None:
        """Retrieve an answer by id scoped to a specific question."""
        result = await session.execute(
            select(Answer)
            .where(Answer.id == answer_id, Answer.question_id == question_id)
            .options(selectinload(Answer.question))
        )
        return result.scalar_one_or_none()

    @staticmethod
    async def delete(session: AsyncSession, answer: Answer) -> None:
        """Delete an answer."""
        await session.delete(answer)
        await session.flush()
