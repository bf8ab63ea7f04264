"""Request dependencies for the current user and session login state."""

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from qanda.db import get_db
from qanda.exceptions import AuthenticationRequiredError
from qanda.models.user import User
from qanda.repositories.user import UserRepository

SESSION_USER_KEY = "user_id"


async def get_current_user(
    request: Request,
    session: AsyncSession = Depends(get_db),
) -> User | None:
    """Load the logged-in user, if any, and expose it on ``request.state``."""
    user = None
    user_id = request.session.get(SESSION_USER_KEY)
    if user_id is not None:
        user = await UserRepository.get_by_id(session, int(user_id))
        if user is None:
            # Account removed since login.
            request.session.pop(SESSION_USER_KEY, None)
        else:
            # Error pages render after the request session has rolled back.
            session.expunge(user)
    request.state.user = user
    return user


async def require_user(
    request: Request,
    user: User | None = Depends(get_current_user),
) -> User:
    """Like get_current_user but sends anonymous visitors to the login page."""
    if user is None:
        raise AuthenticationRequiredError(next_url=request.url.path)
    return user


def login_user(request: Request, user: User) -> None:
    request.session[SESSION_USER_KEY] = user.id
    request.state.user = user


def logout_user(request: Request) -> None:
    request.session.clear()
    request.state.user = None
