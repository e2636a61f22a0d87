"""
Note Nexus Backend — Test Configuration (conftest.py)
======================================================

What:  Shared pytest fixtures for the entire test suite.
How:   Each test gets a fresh in-memory SQLite database (aiosqlite). The
       app's get_db_session dependency is overridden to use it, so routes,
       capability checks and services run unchanged against real SQL.

Fixture Hierarchy:
    ├── db_engine:        in-memory engine with all tables created
    ├── session_factory:  sessions bound to db_engine (for seeding/asserts)
    ├── test_client:      HTTPX AsyncClient wired to the FastAPI app
    ├── seed_user / seed_class:  insert rows directly
    └── auth_headers:     bearer header for an email
"""

import os

# Settings are read at import time, so the environment comes first
os.environ["DATABASE_URL"] = "sqlite+aiosqlite://"
os.environ["ACCESS_TOKEN_SECRET"] = "test-secret-not-real"
os.environ["PAYMENT_SECRET_KEY"] = "sk_test_not_real"
os.environ["LOG_LEVEL"] = "WARNING"

from typing import AsyncGenerator, Dict  # noqa: E402

import pytest  # noqa: E402
import pytest_asyncio  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from notenexus.auth.tokens import create_access_token  # noqa: E402
from notenexus.database import Base, get_db_session  # noqa: E402
from notenexus.models import ClassStatus, CourseClass, Role, User  # noqa: E402


@pytest_asyncio.fixture
async def db_engine():
    engine = create_async_engine("sqlite+aiosqlite://", poolclass=StaticPool)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture
async def session_factory(db_engine):
    return async_sessionmaker(db_engine, class_=AsyncSession, expire_on_commit=False)


@pytest_asyncio.fixture
async def test_client(session_factory) -> AsyncGenerator[AsyncClient, None]:
    """
    HTTPX AsyncClient talking to the app through ASGITransport.

    The override mirrors get_db_session: commit on success, rollback on error.
    """
    from notenexus.main import app

    async def override_get_db_session():
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db_session] = override_get_db_session
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
    app.dependency_overrides.clear()


@pytest.fixture
def auth_headers():
    """auth_headers("a@x.com") → {"Authorization": "Bearer <token>"}"""

    def _headers(email: str) -> Dict[str, str]:
        return {"Authorization": f"Bearer {create_access_token(email)}"}

    return _headers


@pytest.fixture
def seed_user(session_factory):
    async def _seed(email: str, role: Role = Role.STUDENT, enrolled: int = 0) -> User:
        async with session_factory() as session:
            user = User(email=email, name=email.split("@")[0], role=role.value, enrolled=enrolled)
            session.add(user)
            await session.commit()
            return user

    return _seed


@pytest.fixture
def seed_class(session_factory):
    async def _seed(
        name: str = "Watercolor Basics",
        instructor_email: str = "teacher@x.com",
        seats: int = 10,
        enrolled: int = 0,
        status: ClassStatus = ClassStatus.PENDING,
        price: float = 50.0,
    ) -> CourseClass:
        async with session_factory() as session:
            course = CourseClass(
                name=name,
                instructor_email=instructor_email,
                instructor_name="Teacher",
                seats=seats,
                enrolled=enrolled,
                status=status.value,
                price=price,
            )
            session.add(course)
            await session.commit()
            return course

    return _seed


@pytest.fixture
def fetch(session_factory):
    """fetch(Model, id) → fresh row read in its own session."""

    async def _fetch(model, row_id):
        async with session_factory() as session:
            return await session.get(model, row_id)

    return _fetch
