from dataclasses import dataclass, field
from datetime import datetime
from uuid import UUID


@dataclass
class User:
    first_name: str
    last_name: str
    email: str
    age: int
    password: str
    role: str
    id: UUID | None = field(default=None)
    created_at: datetime | None = field(default=None)
    updated_at: datetime | None = field(default=None)


@dataclass
class UserQuery:
    """Filter and ordering for a user listing."""

    search: str | None = None
    sort_by: str | None = None
    descending: bool = False
