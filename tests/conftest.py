"""Shared fixtures: in-memory database, ASGI client and signed-up users."""

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

import coachhub.models  # noqa: F401 - register all models
from coachhub.db.base import Base
from coachhub.db.session import get_db, get_session_maker
from coachhub.main import app

PASSWORD = "Str0ngPass"


def make_engine():
    return create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )


async def create_schema(engine) -> None:
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


def bind_database(session_maker) -> None:
    """Point get_db and the WebSocket session factory at the test database."""

    async def override_get_db():
        async with session_maker() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_session_maker] = lambda: session_maker


def sign_up_body(email: str, name: str, user_type: str) -> dict:
    return {
        "email": email,
        "password": PASSWORD,
        "confirm_password": PASSWORD,
        "name": name,
        "user_type": user_type,
    }


@pytest.fixture
async def engine():
    engine = make_engine()
    await create_schema(engine)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_maker(engine):
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False, autoflush=False)


@pytest.fixture
async def client(session_maker):
    """HTTP client against the app with get_db bound to the test database."""
    bind_database(session_maker)
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()


@pytest.fixture
def sign_up(client):
    """Factory: create an account and return (auth headers, user json)."""

    async def _sign_up(email: str, name: str = "Test User", user_type: str = "trainee"):
        response = await client.post("/api/v1/auth/sign-up", json=sign_up_body(email, name, user_type))
        assert response.status_code == 201, response.text
        body = response.json()
        return {"Authorization": f"Bearer {body['access_token']}"}, body["user"]

    return _sign_up


@pytest.fixture
async def trainer(sign_up):
    return await sign_up("coach@example.com", name="Casey Coach", user_type="trainer")


@pytest.fixture
async def trainee(sign_up):
    return await sign_up("tess@example.com", name="Tess Trainee", user_type="trainee")
