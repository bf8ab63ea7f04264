"""Repository for question database operations."""

from sqlalchemy import func, select, update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from qanda.models.answer import Answer
from qanda.models.question import Question


class QuestionRepository:
    """Handle question persistence operations."""

    @staticmethod
    async def create(
        session: AsyncSession,
        user_id: int,
        title: str,
        slug: str,
        body: str,
    ) -> Question:
        """Create a new question owned by a user."""
        question = Question(user_id=user_id, title=title, slug=slug, body=body)
        session.add(question)
        await session.flush()
        await session.refresh(question)
        return question

    @staticmethod
    async def get_latest_page(
        session: AsyncSession,
        page: int,
        per_page: int,
    ) -> tuple[list[Question], int]:
        """Retrieve one page of questions, newest first, with their owners.

        Returns:
            Tuple of (questions on the page, total number of questions)
        """
        total = await session.scalar(select(func.count()).select_from(Question)) or 0
        offset = (page - 1) * per_page
        # Pages past the end may carry offsets wider than a database integer.
        if offset >= total:
            return [], total

        result = await session.execute(
            select(Question)
            .options(selectinload(Question.user))
            .order_by(Question.created_at.desc(), Question.id.desc())
            .offset(offset)
            .limit(per_page)
        )
        return list(result.scalars().all()), total

    @staticmethod
    async def get_by_id(session: AsyncSession, question_id: int) -> Question | None:
        """Retrieve a question by its ID."""
        result = await session.execute(
            select(Question).where(Question.id == question_id)
        )
        return result.scalar_one_or_none()

    @staticmethod
    async def get_by_slug(session: AsyncSession, slug: str) -> Question | None:
        """Retrieve a question by slug with its owner and answers loaded."""
        result = await session.execute(
            select(Question)
            .where(Question.slug == slug)
            .options(
                selectinload(Question.user),
                selectinload(Question.answers).selectinload(Answer.user),
            )
        )
        return result.scalar_one_or_none()

    @staticmethod
    async def slug_exists(
        session: AsyncSession,
        slug: str,
        exclude_id: int | None = None,
    ) -> bool:
        """Check whether another question already uses a slug."""
        query = select(Question.id).where(Question.slug == slug)
        if exclude_id is not None:
            query = query.where(Question.id != exclude_id)
        result = await session.execute(query.limit(1))
        return result.first() is not None

    @staticmethod
    async def update(
        session: AsyncSession,
        question: Question,
        title: str,
        slug: str,
        body: str,
    ) -> Question:
        """Overwrite the editable fields of a question."""
        question.title = title
        question.slug = slug
        question.body = body
        await session.flush()
        await session.refresh(question)
        return question

    @staticmethod
    async def delete(session: AsyncSession, question: Question) -> None:
        """Delete a question and, through the cascade, its answers."""
        await session.delete(question)
        await session.flush()

    @staticmethod
    async def increment_views(session: AsyncSession, question: Question) -> None:
        """Count one more view of a question, incrementing in SQL."""
        question.views = Question.views + 1
        await session.flush()
        await session.refresh(question, attribute_names=["views"])

    @staticmethod
    async def adjust_answers_count(
        session: AsyncSession,
        question_id: int,
        delta: int,
    ) -> None:
        """Add ``delta`` to the stored answer count of a question."""
        await session.execute(
            update(Question)
            .where(Question.id == question_id)
            .values(answers_count=Question.answers_count + delta)
        )
        await session.flush()

    @staticmethod
    async def set_best_answer(
        session: AsyncSession,
        question_id: int,
        answer_id: int | None,
    ) -> None:
        """Mark an answer as accepted, or clear the accepted answer."""
        await session.execute(
            update(Question)
            .where(Question.id == question_id)
            .values(best_answer_id=answer_id)
        )
        await session.flush()
