"""Question service covering listing, display, and owner-only changes."""

from collections.abc import Mapping
from typing import Any

from loguru import logger
from sqlalchemy.ext.asyncio import AsyncSession

from qanda.config import settings
from qanda.exceptions import NotFoundError
from qanda.markup import slugify
from qanda.models.question import Question
from qanda.models.user import User
from qanda.pagination import Page
from qanda.policies import Gate, gate
from qanda.repositories.question import QuestionRepository
from qanda.schemas.forms import validate_form
from qanda.schemas.question import QuestionForm

DEFAULT_SLUG = "question"
SLUG_MAX_LENGTH = 255
# Path segments under /questions that are routes, not slugs.
RESERVED_SLUGS = frozenset({"create"})


class QuestionService:
    """Create, show, update, and delete questions."""

    def __init__(
        self,
        policy_gate: Gate | None = None,
        per_page: int | None = None,
    ) -> None:
        self.gate = policy_gate or gate
        self.per_page = per_page or settings.questions_per_page

    async def list_questions(
        self,
        session: AsyncSession,
        page: int = 1,
    ) -> Page[Question]:
        """Return one page of the newest questions with their owners loaded."""
        questions, total = await QuestionRepository.get_latest_page(
            session=session,
            page=page,
            per_page=self.per_page,
        )
        return Page(items=questions, page=page, per_page=self.per_page, total=total)

    async def show_question(self, session: AsyncSession, slug: str) -> Question:
        """Resolve a question by slug and count the view."""
        question = await QuestionRepository.get_by_slug(session, slug)
        if question is None:
            raise NotFoundError(resource="Question", resource_id=slug)

        await QuestionRepository.increment_views(session, question)
        return question

    async def get_editable_question(
        self,
        session: AsyncSession,
        user: User,
        question_id: int,
    ) -> Question:
        """Load a question the user is allowed to update."""
        question = await self._get_or_404(session, question_id)
        self.gate.authorize(user, "update", question)
        return question

    async def create_question(
        self,
        session: AsyncSession,
        user: User,
        data: Mapping[str, Any],
    ) -> Question:
        """Validate the submitted fields and store a question owned by ``user``."""
        form = validate_form(QuestionForm, data)
        slug = await self._unique_slug(session, form.title)

        question = await QuestionRepository.create(
            session=session,
            user_id=user.id,
            title=form.title,
            slug=slug,
            body=form.body,
        )

        logger.info(
            "Question created",
            question_id=question.id,
            user_id=user.id,
            slug=question.slug,
        )
        return question

    async def update_question(
        self,
        session: AsyncSession,
        user: User,
        question_id: int,
        data: Mapping[str, Any],
    ) -> Question:
        """Apply an owner's edit; a changed title gets a fresh slug."""
        question = await self.get_editable_question(session, user, question_id)
        form = validate_form(QuestionForm, data)

        slug = question.slug
        if form.title != question.title:
            slug = await self._unique_slug(
                session, form.title, exclude_id=question.id
            )

        question = await QuestionRepository.update(
            session=session,
            question=question,
            title=form.title,
            slug=slug,
            body=form.body,
        )

        logger.info(
            "Question updated",
            question_id=question.id,
            user_id=user.id,
            slug=question.slug,
        )
        return question

    async def delete_question(
        self,
        session: AsyncSession,
        user: User,
        question_id: int,
    ) -> None:
        """Delete a question owned by ``user`` that has no answers yet."""
        question = await self._get_or_404(session, question_id)
        self.gate.authorize(user, "delete", question)

        await QuestionRepository.delete(session, question)

        logger.info(
            "Question deleted",
            question_id=question_id,
            user_id=user.id,
        )

    async def _get_or_404(self, session: AsyncSession, question_id: int) -> Question:
        question = await QuestionRepository.get_by_id(session, question_id)
        if question is None:
            raise NotFoundError(resource="Question", resource_id=question_id)
        return question

    async def _unique_slug(
        self,
        session: AsyncSession,
        title: str,
        exclude_id: int | None = None,
    ) -> str:
        """Slug for ``title``, suffixed with -2, -3, ... until unused.

        The slug, suffix included, never exceeds ``SLUG_MAX_LENGTH``.
        """
        base = _truncate(slugify(title) or DEFAULT_SLUG, SLUG_MAX_LENGTH)
        slug = base
        suffix = 2
        while slug in RESERVED_SLUGS or await QuestionRepository.slug_exists(
            session, slug, exclude_id
        ):
            tail = f"-{suffix}"
            slug = _truncate(base, SLUG_MAX_LENGTH - len(tail)) + tail
            suffix += 1
        return slug


def _truncate(slug: str, length: int) -> str:
    return slug[:length].rstrip("-")
