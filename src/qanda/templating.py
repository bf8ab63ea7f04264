"""Jinja2 environment and helpers for rendering pages.

Every page is rendered through :func:`render`, which adds the current user,
a ``can(ability, resource)`` helper bound to that user, and any flash
messages, field errors and old input left in the session by the previous
request.
"""

from datetime import UTC, datetime
from functools import partial
from pathlib import Path
from typing import Any

from fastapi import Request
from fastapi.templating import Jinja2Templates
from starlette.responses import Response

from qanda.config import settings
from qanda.exceptions import FormValidationError
from qanda.markup import excerpt, render_markdown
from qanda.policies import gate

TEMPLATES_DIR = Path(__file__).parent / "templates"

FLASH_SESSION_KEY = "_flash"
ERRORS_SESSION_KEY = "_errors"
OLD_INPUT_SESSION_KEY = "_old_input"

_TIME_UNITS = (
    ("year", 365 * 24 * 3600),
    ("month", 30 * 24 * 3600),
    ("week", 7 * 24 * 3600),
    ("day", 24 * 3600),
    ("hour", 3600),
    ("minute", 60),
    ("second", 1),
)


def diff_for_humans(value: datetime | None, now: datetime | None = None) -> str:
    """Relative time such as ``3 minutes ago``; naive values are taken as UTC."""
    if value is None:
        return ""
    if value.tzinfo is None:
        value = value.replace(tzinfo=UTC)
    now = now or datetime.now(UTC)
    seconds = int((now - value).total_seconds())
    if seconds < 1:
        return "just now"
    for name, size in _TIME_UNITS:
        count = seconds // size
        if count:
            return f"{count} {name}{'' if count == 1 else 's'} ago"
    return "just now"


templates = Jinja2Templates(directory=TEMPLATES_DIR)
templates.env.filters["markdown"] = render_markdown
templates.env.filters["excerpt"] = excerpt
templates.env.filters["diff_for_humans"] = diff_for_humans
templates.env.globals["app_name"] = settings.app_name


def _session(request: Request) -> dict[str, Any]:
    # Errors raised outside SessionMiddleware still need to render.
    if "session" not in request.scope:
        return {}
    return request.session


def flash(request: Request, message: str, category: str = "success") -> None:
    """Queue a message for the next rendered page."""
    session = _session(request)
    messages = session.get(FLASH_SESSION_KEY, [])
    messages.append({"category": category, "message": message})
    session[FLASH_SESSION_KEY] = messages


def flash_form_errors(request: Request, exc: FormValidationError) -> None:
    """Keep field errors and submitted values for the page redirected to."""
    session = _session(request)
    session[ERRORS_SESSION_KEY] = exc.errors
    session[OLD_INPUT_SESSION_KEY] = exc.values


def render(
    request: Request,
    name: str,
    context: dict[str, Any] | None = None,
    status_code: int = 200,
) -> Response:
    """Render a template with the shared page context."""
    session = _session(request)
    user = getattr(request.state, "user", None)
    page_context: dict[str, Any] = {
        "current_user": user,
        "can": partial(gate.allows, user),
        "messages": session.pop(FLASH_SESSION_KEY, []),
        "errors": session.pop(ERRORS_SESSION_KEY, {}),
        "old": session.pop(OLD_INPUT_SESSION_KEY, {}),
    }
    page_context.update(context or {})
    return templates.TemplateResponse(
        request, name, page_context, status_code=status_code
    )
