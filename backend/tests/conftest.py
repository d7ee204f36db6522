"""
Shared fixtures: a throwaway SQLite database per test, seeded users and
statuses, and httpx clients bound to the FastAPI app.
"""
import os

# Must be set before taskify is imported so the module engine uses aiosqlite
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"

from datetime import timedelta

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import NullPool

from taskify.core.config import settings
from taskify.core.database import Base, get_db, utcnow
from taskify.main import app
from taskify.models import Session, TaskStatus, User


def _enable_foreign_keys(dbapi_connection, connection_record):
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


@pytest.fixture
async def test_engine(tmp_path):
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'taskify.db'}", poolclass=NullPool)
    event.listen(engine.sync_engine, "connect", _enable_foreign_keys)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(test_engine):
    return async_sessionmaker(test_engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
async def db_session(session_factory):
    async with session_factory() as session:
        yield session


@pytest.fixture
async def statuses(db_session: AsyncSession):
    """Status catalog, inserted out of sort order on purpose."""
    rows = [
        TaskStatus(name="Done", sort_order=2),
        TaskStatus(name="Incomplete", sort_order=0),
        TaskStatus(name="In Progress", sort_order=1),
    ]
    db_session.add_all(rows)
    await db_session.commit()
    return {status.name: status for status in rows}


@pytest.fixture
async def test_user(db_session: AsyncSession):
    """Create a test user."""
    user = User(email="john.doe@taskify.com", name="John Doe")
    db_session.add(user)
    await db_session.commit()
    await db_session.refresh(user)
    return user


@pytest.fixture
async def other_user(db_session: AsyncSession):
    """A second tenant whose data must never leak to test_user."""
    user = User(email="jane.doe@taskify.com", name="Jane Doe")
    db_session.add(user)
    await db_session.commit()
    await db_session.refresh(user)
    return user


async def _login(db_session: AsyncSession, user: User, token: str) -> str:
    db_session.add(Session(token=token, user_id=user.id, expires_at=utcnow() + timedelta(days=1)))
    await db_session.commit()
    return f"{token}.signature"


@pytest.fixture
async def client(session_factory):
    """Client with no session cookie."""
    async def override_get_db():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()


@pytest.fixture
async def auth_client(client: AsyncClient, db_session: AsyncSession, test_user: User):
    """Client carrying a valid session cookie for test_user."""
    cookie = await _login(db_session, test_user, "john-session-token")
    client.cookies.set(settings.session_cookie_name, cookie)
    return client


@pytest.fixture
async def other_cookie(db_session: AsyncSession, other_user: User):
    """Session cookie value for other_user."""
    return await _login(db_session, other_user, "jane-session-token")
