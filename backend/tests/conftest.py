"""Test fixtures for ModelFit.

API tests run against an in-memory SQLite database. ``StaticPool`` keeps a
single connection alive so every session in a test sees the same data.
"""

from collections.abc import AsyncGenerator, Awaitable, Callable

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from modelfit.config import settings
from modelfit.core.security import hash_password, issue_token
from modelfit.db.session import get_db
from modelfit.main import app
from modelfit.models import Base, User

TEST_DATABASE_URL = "sqlite+aiosqlite://"
TEST_PASSWORD = "secret123"

# Minimum cost keeps password hashing fast
settings.bcrypt_rounds = 4


@pytest.fixture
async def session_factory() -> AsyncGenerator[async_sessionmaker[AsyncSession], None]:
    engine = create_async_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    await engine.dispose()


@pytest.fixture
async def client(
    session_factory: async_sessionmaker[AsyncSession],
) -> AsyncGenerator[AsyncClient, None]:
    async def override_get_db() -> AsyncGenerator[AsyncSession, None]:
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db] = override_get_db
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        yield c
    app.dependency_overrides.clear()


UserFactory = Callable[..., Awaitable[tuple[User, dict[str, str]]]]


@pytest.fixture
def make_user(session_factory: async_sessionmaker[AsyncSession]) -> UserFactory:
    """Insert a user directly and return it with ready-made auth headers."""
    counter = {"n": 0}

    async def _make_user(
        role: str = "user",
        email: str | None = None,
        phone: str | None = None,
        name: str | None = None,
    ) -> tuple[User, dict[str, str]]:
        counter["n"] += 1
        if email is None and phone is None:
            email = f"user{counter['n']}@example.com"
        async with session_factory() as session:
            user = User(
                email=email,
                phone=phone,
                name=name,
                role=role,
                password_hash=hash_password(TEST_PASSWORD),
            )
            session.add(user)
            await session.commit()
        return user, {"Authorization": f"Bearer {issue_token(user.id, user.email)}"}

    return _make_user