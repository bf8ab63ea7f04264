"""Registration, login, and logout pages."""

from urllib.parse import urlsplit

from fastapi import APIRouter, Depends, Form, Query, Request, status
from fastapi.responses import HTMLResponse, RedirectResponse, Response
from sqlalchemy.ext.asyncio import AsyncSession

from qanda.db import get_db
from qanda.dependencies import get_current_user, login_user, logout_user
from qanda.exceptions import FormValidationError
from qanda.models.user import User
from qanda.services.auth import AuthService
from qanda.templating import flash, render

router = APIRouter(tags=["Auth"])

HOME_URL = "/questions"


def _safe_next(url: str | None) -> str:
    """Only follow local redirect targets.

    Browsers read a backslash as a slash, so it counts as one when looking
    for a scheme or host.
    """
    if not url or not url.startswith("/"):
        return HOME_URL
    parts = urlsplit(url.replace("\\", "/"))
    if parts.scheme or parts.netloc:
        return HOME_URL
    return url


@router.get("/register", response_class=HTMLResponse, summary="Registration form")
async def register_form(
    request: Request,
    _user: User | None = Depends(get_current_user),
) -> Response:
    return render(request, "auth/register.html")


@router.post("/register", summary="Create an account")
async def register(
    request: Request,
    name: str = Form(""),
    email: str = Form(""),
    password: str = Form(""),
    password_confirmation: str = Form(""),
    session: AsyncSession = Depends(get_db),
) -> Response:
    """Create the account and log it in."""
    try:
        user = await AuthService().register(
            session,
            {
                "name": name,
                "email": email,
                "password": password,
                "password_confirmation": password_confirmation,
            },
        )
    except FormValidationError as exc:
        return render(
            request,
            "auth/register.html",
            {"errors": exc.errors, "old": exc.values},
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        )

    login_user(request, user)
    flash(request, f"Welcome, {user.name}!")
    return RedirectResponse(HOME_URL, status_code=status.HTTP_303_SEE_OTHER)


@router.get("/login", response_class=HTMLResponse, summary="Login form")
async def login_form(
    request: Request,
    next_url: str | None = Query(None, alias="next"),
    _user: User | None = Depends(get_current_user),
) -> Response:
    return render(request, "auth/login.html", {"next_url": _safe_next(next_url)})


@router.post("/login", summary="Log in")
async def login(
    request: Request,
    email: str = Form(""),
    password: str = Form(""),
    next_url: str = Form("", alias="next"),
    session: AsyncSession = Depends(get_db),
) -> Response:
    """Check credentials and start a session."""
    try:
        user = await AuthService().authenticate(
            session, {"email": email, "password": password}
        )
    except FormValidationError as exc:
        return render(
            request,
            "auth/login.html",
            {"errors": exc.errors, "old": exc.values, "next_url": _safe_next(next_url)},
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        )

    login_user(request, user)
    return RedirectResponse(_safe_next(next_url), status_code=status.HTTP_303_SEE_OTHER)


@router.post("/logout", summary="Log out")
async def logout(request: Request) -> Response:
    logout_user(request)
    flash(request, "You have been logged out.", category="info")
    return RedirectResponse(HOME_URL, status_code=status.HTTP_303_SEE_OTHER)
