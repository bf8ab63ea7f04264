"""Pydantic schemas for answer forms."""

from pydantic import BaseModel, ConfigDict, Field

ANSWER_MIN_LENGTH = 5


class AnswerForm(BaseModel):
    """Fields accepted when answering a question."""

    model_config = ConfigDict(str_strip_whitespace=True)

    body: str = Field(
        ...,
        min_length=ANSWER_MIN_LENGTH,
        description="Answer body in Markdown",
    )
