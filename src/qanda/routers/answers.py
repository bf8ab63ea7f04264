"""Answer submission, removal, and acceptance."""

from fastapi import APIRouter, Depends, Form, Request, status
from fastapi.responses import RedirectResponse, Response
from sqlalchemy.ext.asyncio import AsyncSession

from qanda.db import get_db
from qanda.dependencies import require_user
from qanda.exceptions import FormValidationError, NotFoundError
from qanda.models.user import User
from qanda.repositories.question import QuestionRepository
from qanda.services.answer import AnswerService
from qanda.templating import flash, flash_form_errors

router = APIRouter(tags=["Answers"])


@router.post("/questions/{question_id}/answers", summary="Answer a question")
async def store_answer(
    request: Request,
    question_id: int,
    body: str = Form(""),
    user: User = Depends(require_user),
    session: AsyncSession = Depends(get_db),
) -> Response:
    """Post an answer and return to the question page."""
    question = await QuestionRepository.get_by_id(session, question_id)
    if question is None:
        raise NotFoundError(resource="Question", resource_id=question_id)

    try:
        await AnswerService().post_answer(
            session=session,
            user=user,
            question_id=question_id,
            data={"body": body},
        )
    except FormValidationError as exc:
        flash_form_errors(request, exc)
    else:
        flash(request, "Your answer has been submitted.")

    return RedirectResponse(question.url, status_code=status.HTTP_303_SEE_OTHER)


@router.delete(
    "/questions/{question_id}/answers/{answer_id}",
    summary="Delete an answer",
)
async def delete_answer(
    request: Request,
    question_id: int,
    answer_id: int,
    user: User = Depends(require_user),
    session: AsyncSession = Depends(get_db),
) -> Response:
    """Delete the current user's answer."""
    question = await AnswerService().delete_answer(
        session=session,
        user=user,
        question_id=question_id,
        answer_id=answer_id,
    )

    flash(request, "Your answer has been removed.")
    return RedirectResponse(question.url, status_code=status.HTTP_303_SEE_OTHER)


@router.post("/answers/{answer_id}/accept", summary="Accept an answer")
async def accept_answer(
    request: Request,
    answer_id: int,
    user: User = Depends(require_user),
    session: AsyncSession = Depends(get_db),
) -> Response:
    """Mark an answer as the best answer to its question."""
    question = await AnswerService().accept_answer(session, user, answer_id)

    flash(request, "You have accepted this answer as the best answer.")
    return RedirectResponse(question.url, status_code=status.HTTP_303_SEE_OTHER)
