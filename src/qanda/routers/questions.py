"""Resourceful question pages."""

from fastapi import APIRouter, Depends, Form, Query, Request, status
from fastapi.responses import HTMLResponse, RedirectResponse, Response
from sqlalchemy.ext.asyncio import AsyncSession

from qanda.db import get_db
from qanda.dependencies import get_current_user, require_user
from qanda.exceptions import FormValidationError
from qanda.models.user import User
from qanda.services.question import QuestionService
from qanda.templating import flash, render

router = APIRouter(prefix="/questions", tags=["Questions"])

INDEX_URL = "/questions"


@router.get(
    "",
    response_class=HTMLResponse,
    summary="List questions",
    description="Newest questions first, one page at a time.",
)
async def list_questions(
    request: Request,
    page: int = Query(1, ge=1),
    session: AsyncSession = Depends(get_db),
    _user: User | None = Depends(get_current_user),
) -> Response:
    """Render a page of questions."""
    result = await QuestionService().list_questions(session, page=page)
    return render(request, "questions/index.html", {"page": result})


@router.get("/create", response_class=HTMLResponse, summary="New question form")
async def create_question_form(
    request: Request,
    _user: User = Depends(require_user),
) -> Response:
    """Render an empty question form."""
    return render(request, "questions/create.html")


@router.post("", summary="Ask a question")
async def store_question(
    request: Request,
    title: str = Form(""),
    body: str = Form(""),
    user: User = Depends(require_user),
    session: AsyncSession = Depends(get_db),
) -> Response:
    """Create a question, or show the form again with errors."""
    try:
        await QuestionService().create_question(
            session=session,
            user=user,
            data={"title": title, "body": body},
        )
    except FormValidationError as exc:
        return render(
            request,
            "questions/create.html",
            {"errors": exc.errors, "old": exc.values},
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        )

    flash(request, "Your question has been submitted.")
    return RedirectResponse(INDEX_URL, status_code=status.HTTP_303_SEE_OTHER)


@router.get(
    "/{slug}",
    response_class=HTMLResponse,
    summary="Show a question",
    description="Questions are addressed by slug; each visit counts as a view.",
)
async def show_question(
    request: Request,
    slug: str,
    session: AsyncSession = Depends(get_db),
    _user: User | None = Depends(get_current_user),
) -> Response:
    """Render a question with its answers."""
    question = await QuestionService().show_question(session, slug)
    return render(request, "questions/show.html", {"question": question})


@router.get("/{question_id}/edit", response_class=HTMLResponse, summary="Edit form")
async def edit_question_form(
    request: Request,
    question_id: int,
    user: User = Depends(require_user),
    session: AsyncSession = Depends(get_db),
) -> Response:
    """Render the edit form for the owner of a question."""
    question = await QuestionService().get_editable_question(
        session, user, question_id
    )
    return render(request, "questions/edit.html", {"question": question})


@router.api_route("/{question_id}", methods=["PUT", "PATCH"], summary="Update")
async def update_question(
    request: Request,
    question_id: int,
    title: str = Form(""),
    body: str = Form(""),
    user: User = Depends(require_user),
    session: AsyncSession = Depends(get_db),
) -> Response:
    """Save an owner's edit, or show the form again with errors."""
    service = QuestionService()
    try:
        await service.update_question(
            session=session,
            user=user,
            question_id=question_id,
            data={"title": title, "body": body},
        )
    except FormValidationError as exc:
        question = await service.get_editable_question(session, user, question_id)
        return render(
            request,
            "questions/edit.html",
            {"question": question, "errors": exc.errors, "old": exc.values},
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        )

    flash(request, "Your question has been updated.")
    return RedirectResponse(INDEX_URL, status_code=status.HTTP_303_SEE_OTHER)


@router.delete("/{question_id}", summary="Delete a question")
async def delete_question(
    request: Request,
    question_id: int,
    user: User = Depends(require_user),
    session: AsyncSession = Depends(get_db),
) -> Response:
    """Delete an unanswered question owned by the current user."""
    await QuestionService().delete_question(session, user, question_id)

    flash(request, "Your question has been deleted.")
    return RedirectResponse(INDEX_URL, status_code=status.HTTP_303_SEE_OTHER)
