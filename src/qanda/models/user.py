"""User model for registered accounts."""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import DateTime, String, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from qanda.models.base import Base

if TYPE_CHECKING:
    from qanda.models.answer import Answer
    from qanda.models.question import Question


class User(Base):
    """Represents a registered user who can ask and answer questions."""

    __tablename__ = "users"

    id: Mapped[int] = mapped_column(primary_key=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    email: Mapped[str] = mapped_column(
        String(255), unique=True, index=True, nullable=False
    )
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)
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
    questions: Mapped[list[Question]] = relationship(
        "Question",
        back_populates="user",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
    answers: Mapped[list[Answer]] = relationship(
        "Answer",
        back_populates="user",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
