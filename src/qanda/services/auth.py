"""Registration and login."""

from collections.abc import Mapping
from typing import Any

from loguru import logger
from sqlalchemy.ext.asyncio import AsyncSession

from qanda.exceptions import FormValidationError
from qanda.models.user import User
from qanda.repositories.user import UserRepository
from qanda.schemas.auth import LoginForm, RegisterForm
from qanda.schemas.forms import validate_form
from qanda.security import hash_password, verify_password

FAILED_LOGIN_MESSAGE = "These credentials do not match our records."


class AuthService:
    """Create accounts and check credentials."""

    async def register(self, session: AsyncSession, data: Mapping[str, Any]) -> User:
        """Validate registration fields and create the account."""
        form = validate_form(RegisterForm, data)

        if await UserRepository.get_by_email(session, form.email) is not None:
            raise FormValidationError(
                errors={"email": ["The email has already been taken."]},
                values={"name": form.name, "email": form.email},
            )

        user = await UserRepository.create(
            session=session,
            name=form.name,
            email=form.email,
            password_hash=hash_password(form.password),
        )

        logger.info("User registered", user_id=user.id)
        return user

    async def authenticate(
        self,
        session: AsyncSession,
        data: Mapping[str, Any],
    ) -> User:
        """Return the user matching the submitted email and password."""
        form = validate_form(LoginForm, data)

        user = await UserRepository.get_by_email(session, form.email)
        if user is None or not verify_password(user.password_hash, form.password):
            logger.info("Login failed", email_domain=form.email.rpartition("@")[2])
            raise FormValidationError(
                errors={"email": [FAILED_LOGIN_MESSAGE]},
                values={"email": form.email},
            )

        logger.info("User logged in", user_id=user.id)
        return user
