"""Pytest configuration for all tests."""

import os

# must be set before app.config builds its settings
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("BCRYPT_ROUNDS", "4")
os.environ.setdefault("SECRET_KEY", "test-secret-key")

from typing import AsyncGenerator

import pytest_asyncio
from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from app.core.security import create_access_token
from app.database import Base, get_db
from app.models import performance, user  # noqa: F401
from app.models.user import User
from app.utils.password import hash_password

DEFAULT_PASSWORD = "Password123"


@pytest_asyncio.fixture
async def db_session() -> AsyncGenerator[AsyncSession, None]:
    """In-memory SQLite database, fresh for every test."""
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
        echo=False,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    session_maker = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    async with session_maker() as session:
        yield session
        await session.rollback()

    await engine.dispose()


@pytest_asyncio.fixture
async def client(db_session: AsyncSession) -> AsyncGenerator[AsyncClient, None]:
    """Test client sharing the test session through the get_db override."""
    from app.main import app

    async def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac

    app.dependency_overrides = {}


async def create_user(
    db: AsyncSession,
    email: str,
    role: str = "user",
    status: str = "active",
    password: str = DEFAULT_PASSWORD,
    name: str = "Awa",
    surname: str = "Diop",
) -> User:
    user = User(
        name=name,
        surname=surname,
        email=email,
        hashed_password=hash_password(password),
        role=role,
        status=status,
        failed_login_attempts=0,
        is_blocked=False,
    )
    db.add(user)
    await db.commit()
    await db.refresh(user)
    return user


def auth_headers(user_id: int) -> dict:
    return {"Authorization": f"Bearer {create_access_token(user_id)}"}


@pytest_asyncio.fixture
async def regular_user(db_session: AsyncSession) -> User:
    return await create_user(db_session, "awa.diop@salesperf.io")


@pytest_asyncio.fixture
async def other_user(db_session: AsyncSession) -> User:
    return await create_user(db_session, "moussa.fall@salesperf.io", name="Moussa", surname="Fall")


@pytest_asyncio.fixture
async def manager_user(db_session: AsyncSession) -> User:
    return await create_user(db_session, "boura.ngom@salesperf.io", role="manager", name="Bourama", surname="Ngom")


@pytest_asyncio.fixture
async def admin_user(db_session: AsyncSession) -> User:
    return await create_user(db_session, "marie.therese@salesperf.io", role="admin", name="Marie", surname="Therese")


def make_metrics(year: int = 2024, month: int = 3, **overrides) -> dict:
    """Service-level payload: 40 appointments, 20 sales, 90k of a 100k target."""
    data = {
        "year": year,
        "month": month,
        "revenue": 90000.0,
        "revenue_target": 100000.0,
        "new_clients": 6,
        "appointments_completed": 40,
        "appointments_planned": 45,
        "sales_completed": 20,
        "files_updated": 30,
        "total_files": 40,
        "events": 2,
        "satisfaction": 4.5,
        "comment": None,
        "status": "validated",
    }
    data.update(overrides)
    return data
