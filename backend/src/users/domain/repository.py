from typing import Any, Protocol
from uuid import UUID

from users.domain.entities import User, UserQuery


class UserRepository(Protocol):
    async def find(self, query: UserQuery) -> list[User]: ...

    async def count(self) -> int: ...

    async def get_by_id(self, user_id: UUID) -> User | None: ...

    async def get_by_email(self, email: str) -> User | None: ...

    async def create(self, user: User) -> User: ...

    async def create_many(self, users: list[User]) -> int: ...

    async def update(self, user_id: UUID, changes: dict[str, Any]) -> User | None: ...

    async def delete(self, user_id: UUID) -> int: ...
