"""Repository for user database operations."""

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from qanda.models.user import User


class UserRepository:
    """Handle user persistence operations."""

    @staticmethod
    async def create(
        session: AsyncSession,
        name: str,
        email: str,
        password_hash: str,
    ) -> User:
        """Create a new user record."""
        user = User(name=name, email=email.lower(), password_hash=password_hash)
        session.add(user)
        await session.flush()
        await session.refresh(user)
        return user

    @staticmethod
    async def get_by_id(session: AsyncSession, user_id: int) -> User | None:
        """Retrieve a user by its ID."""
        result = await session.execute(select(User).where(User.id == user_id))
        return result.scalar_one_or_none()

    @staticmethod
    async def get_by_email(session: AsyncSession, email: str) -> User | None:
        """Retrieve a user by email, ignoring case."""
        result = await session.execute(
            select(User).where(func.lower(User.email) == email.lower())
        )
        return result.scalar_one_or_none()
