from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class CreateUserRequest(CamelModel):
    first_name: str | None = None
    last_name: str | None = None
    email: str | None = None
    age: int | None = None
    password: str | None = None
    role: str | None = None


class UpdateUserRequest(CamelModel):
    first_name: str | None = None
    last_name: str | None = None
    email: str | None = None
    age: int | None = None
    password: str | None = None
    role: str | None = None


class UserResponse(CamelModel):
    id: UUID
    first_name: str
    last_name: str
    email: str
    age: int
    password: str
    role: str
    created_at: datetime | None = None
    updated_at: datetime | None = None


class DeleteUserResponse(CamelModel):
    message: str
    deleted_count: int
