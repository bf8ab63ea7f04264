"""Exception handlers for the FastAPI application."""

from urllib.parse import urlencode

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import RedirectResponse, Response
from loguru import logger
from starlette.exceptions import HTTPException as StarletteHTTPException

from qanda.exceptions import (
    AuthenticationRequiredError,
    AuthorizationError,
    FormValidationError,
    NotFoundError,
    QandAException,
)
from qanda.templating import flash, render

ERROR_TEMPLATE = "errors/error.html"

_ERROR_TITLES = {
    status.HTTP_403_FORBIDDEN: "Forbidden",
    status.HTTP_404_NOT_FOUND: "Not Found",
    status.HTTP_405_METHOD_NOT_ALLOWED: "Method Not Allowed",
    status.HTTP_422_UNPROCESSABLE_ENTITY: "Unprocessable Content",
    status.HTTP_500_INTERNAL_SERVER_ERROR: "Server Error",
}


def get_request_id(request: Request) -> str | None:
    """Extract request_id from request state if available."""
    return getattr(request.state, "request_id", None)


def render_error(
    request: Request,
    status_code: int,
    message: str,
    error_code: str | None = None,
) -> Response:
    """Render the shared error page."""
    return render(
        request,
        ERROR_TEMPLATE,
        {
            "status_code": status_code,
            "title": _ERROR_TITLES.get(status_code, "Error"),
            "message": message,
            "error_code": error_code,
            "request_id": get_request_id(request),
        },
        status_code=status_code,
    )


async def qanda_exception_handler(
    request: Request,
    exc: QandAException,
) -> Response:
    """Handle custom QandA exceptions."""
    if isinstance(exc, AuthenticationRequiredError):
        flash(request, exc.message, category="info")
        url = "/login"
        if exc.next_url:
            url = f"{url}?{urlencode({'next': exc.next_url})}"
        return RedirectResponse(url, status_code=status.HTTP_303_SEE_OTHER)

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    if isinstance(exc, NotFoundError):
        status_code = status.HTTP_404_NOT_FOUND
    elif isinstance(exc, AuthorizationError):
        status_code = status.HTTP_403_FORBIDDEN
    elif isinstance(exc, FormValidationError):
        status_code = status.HTTP_422_UNPROCESSABLE_ENTITY

    logger.info(
        "Request failed",
        request_id=get_request_id(request),
        error_code=exc.error_code,
        status_code=status_code,
        **exc.details,
    )
    return render_error(request, status_code, exc.message, exc.error_code)


async def http_exception_handler(
    request: Request,
    exc: StarletteHTTPException,
) -> Response:
    """Render framework HTTP errors (unknown route, wrong method)."""
    response = render_error(request, exc.status_code, str(exc.detail))
    if exc.headers:
        response.headers.update(exc.headers)
    return response


async def validation_exception_handler(
    request: Request,
    exc: RequestValidationError,
) -> Response:
    """Handle malformed path or query parameters."""
    logger.info(
        "Request validation failed",
        request_id=get_request_id(request),
        errors=exc.errors(),
    )
    return render_error(
        request,
        status.HTTP_422_UNPROCESSABLE_ENTITY,
        "The request parameters were invalid.",
        "VALIDATION_ERROR",
    )


async def generic_exception_handler(
    request: Request,
    exc: Exception,
) -> Response:
    """Handle unexpected exceptions."""
    logger.opt(exception=exc).error(
        "Unhandled exception",
        request_id=get_request_id(request),
    )
    return render_error(
        request,
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        "Internal server error",
        "INTERNAL_ERROR",
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Register all exception handlers with the app."""
    app.add_exception_handler(QandAException, qanda_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, generic_exception_handler)
