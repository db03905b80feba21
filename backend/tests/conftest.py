import os

import pytest
from httpx import ASGITransport, AsyncClient

from main import app
from shared.dependencies import get_db
from shared.infrastructure.database import Base, Database

import users.infrastructure.orm_models  # noqa: F401

TEST_DATABASE_URL = os.environ.get("TEST_DATABASE_URL")


def user_payload(suffix: str = "", **overrides) -> dict:
    """Build a create-user request body."""
    payload = {
        "firstName": "Ann",
        "lastName": "Lee",
        "email": f"ann{suffix}@example.com",
        "age": 30,
    }
    payload.update(overrides)
    return payload


@pytest.fixture
async def database(tmp_path):
    database = Database(TEST_DATABASE_URL or f"sqlite+aiosqlite:///{tmp_path / 'test.db'}")
    await database.connect()
    yield database
    async with database.engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await database.disconnect()


@pytest.fixture
async def db(database):
    async with database.session() as session:
        yield session


@pytest.fixture(autouse=True)
async def override_db(database):
    async def _override():
        async with database.session() as session:
            yield session

    app.dependency_overrides[get_db] = _override
    yield
    app.dependency_overrides.clear()


@pytest.fixture
async def client():
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
