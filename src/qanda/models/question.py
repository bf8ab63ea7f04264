"""Question model for storing user-asked questions."""

from __future__ import annotations

from datetime import datetime
from enum import StrEnum
from typing import TYPE_CHECKING

from sqlalchemy import DateTime, ForeignKey, String, Text, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from qanda.config import settings
from qanda.markup import excerpt, render_markdown
from qanda.models.base import Base

if TYPE_CHECKING:
    from qanda.models.answer import Answer
    from qanda.models.user import User


class QuestionStatus(StrEnum):
    """Answered state derived from answer count and best answer."""

    UNANSWERED = "unanswered"
    ANSWERED = "answered"
    ANSWERED_ACCEPTED = "answered-accepted"


class Question(Base):
    """Represents a question asked by a user."""

    __tablename__ = "questions"

    id: Mapped[int] = mapped_column(primary_key=True)
    user_id: Mapped[int] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    slug: Mapped[str] = mapped_column(
        String(255), unique=True, index=True, nullable=False
    )
    body: Mapped[str] = mapped_column(Text, nullable=False)
    views: Mapped[int] = mapped_column(default=0, server_default="0", nullable=False)
    answers_count: Mapped[int] = mapped_column(
        default=0, server_default="0", nullable=False
    )
    votes: Mapped[int] = mapped_column(default=0, server_default="0", nullable=False)
    best_answer_id: Mapped[int | None] = mapped_column()
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False,
    )

    # Relationships
    user: Mapped[User] = relationship("User", back_populates="questions")
    answers: Mapped[list[Answer]] = relationship(
        "Answer",
        back_populates="question",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="Answer.id",
    )

    @property
    def status(self) -> QuestionStatus:
        if self.best_answer_id is not None:
            return QuestionStatus.ANSWERED_ACCEPTED
        if self.answers_count > 0:
            return QuestionStatus.ANSWERED
        return QuestionStatus.UNANSWERED

    @property
    def url(self) -> str:
        return f"/questions/{self.slug}"

    @property
    def body_html(self) -> str:
        return render_markdown(self.body)

    @property
    def excerpt(self) -> str:
        return excerpt(self.body, settings.excerpt_length)
