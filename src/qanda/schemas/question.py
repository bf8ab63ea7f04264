"""Pydantic schemas for question forms."""

from pydantic import BaseModel, ConfigDict, Field

TITLE_MIN_LENGTH = 5
TITLE_MAX_LENGTH = 255
BODY_MIN_LENGTH = 5


class QuestionForm(BaseModel):
    """Fields accepted when asking or editing a question."""

    model_config = ConfigDict(str_strip_whitespace=True)

    title: str = Field(
        ...,
        min_length=TITLE_MIN_LENGTH,
        max_length=TITLE_MAX_LENGTH,
        description="Question title",
    )
    body: str = Field(
        ...,
        min_length=BODY_MIN_LENGTH,
        description="Question body in Markdown",
    )
