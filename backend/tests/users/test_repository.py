from datetime import datetime, timezone
from uuid import uuid4

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.exc import OperationalError

from main import app
from shared.dependencies import get_db
from shared.exceptions import DuplicateEmailError, StoreUnavailableError
from users.application.mutations import create_user
from users.domain.entities import User, UserQuery
from users.infrastructure.user_repository import DbUserRepository


class BrokenSession:
    async def execute(self, *args, **kwargs):
        raise OperationalError("SELECT 1", {}, Exception("connection refused"))


@pytest.fixture
async def repo(db):
    repo = DbUserRepository(db)
    await create_user(repo, first_name="A", last_name="B", email="a@x.com", age=1)
    await create_user(repo, first_name="C", last_name="D", email="c@x.com", age=2)
    return repo


async def test_unknown_sort_field_keeps_all_rows(repo):
    users = await repo.find(UserQuery(sort_by="nope", descending=True))
    assert len(users) == 2


async def test_sort_by_id_alias(repo):
    users = await repo.find(UserQuery(sort_by="_id"))
    assert [u.id for u in users] == sorted(u.id for u in users)


async def test_count(repo):
    assert await repo.count() == 2


async def test_find_wraps_store_errors():
    repo = DbUserRepository(BrokenSession())
    with pytest.raises(StoreUnavailableError, match="Failed to fetch users") as exc_info:
        await repo.find(UserQuery())
    assert isinstance(exc_info.value.__cause__, OperationalError)


async def test_delete_wraps_store_errors():
    repo = DbUserRepository(BrokenSession())
    with pytest.raises(StoreUnavailableError, match="Failed to delete user"):
        await repo.delete(uuid4())


async def test_store_failure_is_server_error(client):
    async def _broken():
        yield BrokenSession()

    app.dependency_overrides[get_db] = _broken
    resp = await client.get("/api/users")
    assert resp.status_code == 500
    assert resp.json() == {"error": "Failed to fetch users"}


class UnreachableSession:
    async def execute(self, *args, **kwargs):
        raise ConnectionRefusedError(111, "Connect call failed")


class FailingSession:
    async def execute(self, *args, **kwargs):
        raise RuntimeError("unexpected")


async def test_find_wraps_connection_errors():
    repo = DbUserRepository(UnreachableSession())
    with pytest.raises(StoreUnavailableError, match="Failed to fetch users") as exc_info:
        await repo.find(UserQuery())
    assert isinstance(exc_info.value.__cause__, ConnectionRefusedError)


async def test_unreachable_store_is_server_error(client):
    async def _unreachable():
        yield UnreachableSession()

    app.dependency_overrides[get_db] = _unreachable
    resp = await client.get("/api/users")
    assert resp.status_code == 500
    assert resp.json() == {"error": "Failed to fetch users"}


async def test_unexpected_error_keeps_error_body():
    async def _failing():
        yield FailingSession()

    app.dependency_overrides[get_db] = _failing
    transport = ASGITransport(app=app, raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        resp = await ac.get("/api/users")
    assert resp.status_code == 500
    assert resp.json() == {"error": "Internal server error"}


async def test_create_duplicate_email_rejected_by_store(db):
    repo = DbUserRepository(db)

    def make_user():
        return User(
            first_name="Dee",
            last_name="Ray",
            email="d@x.com",
            age=33,
            password="pw",
            role="user",
            created_at=datetime.now(timezone.utc),
        )

    await repo.create(make_user())
    with pytest.raises(DuplicateEmailError):
        await repo.create(make_user())
    assert await repo.count() == 1
