"""Shared fixtures: in-memory database, seeded rows, and an HTTP client."""

import os

os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("DEBUG", "false")
os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ.setdefault("AUTO_CREATE_TABLES", "false")

import pytest  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy import func, select, update  # noqa: E402
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from qanda.db import build_engine, get_db  # noqa: E402
from qanda.main import app  # noqa: E402
from qanda.markup import slugify  # noqa: E402
from qanda.models import Answer, Base, Question, User  # noqa: E402
from qanda.security import hash_password  # noqa: E402

TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"
DEFAULT_PASSWORD = "correct-horse-battery"


@pytest.fixture
def default_password() -> str:
    """Password every seeded user is created with."""
    return DEFAULT_PASSWORD


@pytest.fixture
async def test_engine():
    """Create an async SQLite engine for testing."""
    engine = build_engine(TEST_DATABASE_URL, poolclass=StaticPool)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(test_engine):
    """Create the session factory."""
    return async_sessionmaker(test_engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
async def test_session(session_factory):
    """Create a test session."""
    async with session_factory() as session:
        yield session


@pytest.fixture
async def author(test_session: AsyncSession) -> User:
    """A user who owns the questions created in service tests."""
    user = User(
        name="Alice",
        email="alice@example.com",
        password_hash=hash_password(DEFAULT_PASSWORD),
    )
    test_session.add(user)
    await test_session.flush()
    await test_session.refresh(user)
    return user


@pytest.fixture
async def other_user(test_session: AsyncSession) -> User:
    """A second user who owns nothing."""
    user = User(
        name="Bob",
        email="bob@example.com",
        password_hash=hash_password(DEFAULT_PASSWORD),
    )
    test_session.add(user)
    await test_session.flush()
    await test_session.refresh(user)
    return user


@pytest.fixture
async def question(test_session: AsyncSession, author: User) -> Question:
    """An unanswered question owned by ``author``."""
    question = Question(
        user_id=author.id,
        title="How do I configure SQLAlchemy?",
        slug="how-do-i-configure-sqlalchemy",
        body="I want to use the async engine with FastAPI.",
    )
    test_session.add(question)
    await test_session.flush()
    await test_session.refresh(question)
    return question


class Seeder:
    """Commit rows through their own sessions so HTTP requests can see them."""

    def __init__(self, factory: async_sessionmaker[AsyncSession]) -> None:
        self.factory = factory

    async def _save(self, obj):
        async with self.factory() as session:
            session.add(obj)
            await session.flush()
            await session.refresh(obj)
            await session.commit()
        return obj

    async def user(
        self,
        name: str = "Alice",
        password: str = DEFAULT_PASSWORD,
    ) -> User:
        return await self._save(
            User(
                name=name,
                email=f"{name.lower()}@example.com",
                password_hash=hash_password(password),
            )
        )

    async def question(
        self,
        user: User,
        title: str = "How do I write async tests?",
        body: str = "Looking for **pytest** advice.",
    ) -> Question:
        return await self._save(
            Question(user_id=user.id, title=title, slug=slugify(title), body=body)
        )

    async def answer(
        self,
        question: Question,
        user: User,
        body: str = "Use pytest-asyncio in auto mode.",
    ) -> Answer:
        answer = await self._save(
            Answer(question_id=question.id, user_id=user.id, body=body)
        )
        async with self.factory() as session:
            await session.execute(
                update(Question)
                .where(Question.id == question.id)
                .values(answers_count=Question.answers_count + 1)
            )
            await session.commit()
        return answer

    async def get_question(self, question_id: int) -> Question | None:
        async with self.factory() as session:
            return await session.get(Question, question_id)

    async def count_questions(self) -> int:
        async with self.factory() as session:
            return await session.scalar(select(func.count()).select_from(Question))


@pytest.fixture
def seed(session_factory) -> Seeder:
    return Seeder(session_factory)


@pytest.fixture
async def client(session_factory):
    """HTTP client bound to the app with the test database injected."""

    async def _get_db():
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db] = _get_db
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://testserver") as client:
        yield client
    app.dependency_overrides.clear()


@pytest.fixture
def login(client: AsyncClient):
    """Log a user in on ``client``; the session cookie is kept by the client."""

    async def _login(user: User, password: str = DEFAULT_PASSWORD) -> None:
        response = await client.post(
            "/login", data={"email": user.email, "password": password}
        )
        assert response.status_code == 303, response.text

    return _login
