import logging
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any
from uuid import UUID

from sqlalchemy import delete, func, or_, select, update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from shared.exceptions import DuplicateEmailError, StoreUnavailableError
from users.domain.entities import User, UserQuery
from users.infrastructure.orm_models import UserModel

logger = logging.getLogger(__name__)

# Wire names accepted by ``sortBy``.
SORT_COLUMNS = {
    "id": UserModel.id,
    "_id": UserModel.id,
    "firstName": UserModel.first_name,
    "lastName": UserModel.last_name,
    "email": UserModel.email,
    "age": UserModel.age,
    "password": UserModel.password,
    "role": UserModel.role,
    "createdAt": UserModel.created_at,
    "updatedAt": UserModel.updated_at,
}


@contextmanager
def _store_errors(message: str) -> Iterator[None]:
    try:
        yield
    except (SQLAlchemyError, OSError) as exc:
        logger.exception(message)
        raise StoreUnavailableError(message) from exc


class DbUserRepository:
    def __init__(self, session: AsyncSession):
        self.session = session

    async def find(self, query: UserQuery) -> list[User]:
        stmt = select(UserModel)
        if query.search:
            stmt = stmt.where(
                or_(
                    UserModel.first_name.icontains(query.search, autoescape=True),
                    UserModel.last_name.icontains(query.search, autoescape=True),
                )
            )
        column = SORT_COLUMNS.get(query.sort_by) if query.sort_by else None
        if column is not None:
            stmt = stmt.order_by(column.desc() if query.descending else column.asc())

        with _store_errors("Failed to fetch users"):
            result = await self.session.execute(stmt)
            return [_to_entity(m) for m in result.scalars().all()]

    async def count(self) -> int:
        with _store_errors("Failed to count users"):
            result = await self.session.execute(select(func.count()).select_from(UserModel))
            return result.scalar_one()

    async def get_by_id(self, user_id: UUID) -> User | None:
        with _store_errors("Failed to fetch user"):
            result = await self.session.execute(
                select(UserModel)
                .where(UserModel.id == user_id)
                .execution_options(populate_existing=True)
            )
            model = result.scalar_one_or_none()
        return _to_entity(model) if model else None

    async def get_by_email(self, email: str) -> User | None:
        with _store_errors("Failed to fetch user"):
            result = await self.session.execute(
                select(UserModel).where(UserModel.email == email)
            )
            model = result.scalar_one_or_none()
        return _to_entity(model) if model else None

    async def create(self, user: User) -> User:
        model = _to_model(user)
        with _store_errors("Failed to create user"):
            self.session.add(model)
            try:
                await self.session.commit()
            except IntegrityError as exc:
                await self.session.rollback()
                raise DuplicateEmailError() from exc
            await self.session.refresh(model)
        return _to_entity(model)

    async def create_many(self, users: list[User]) -> int:
        with _store_errors("Failed to create users"):
            self.session.add_all([_to_model(u) for u in users])
            await self.session.commit()
        return len(users)

    async def update(self, user_id: UUID, changes: dict[str, Any]) -> User | None:
        with _store_errors("Failed to update user"):
            try:
                result = await self.session.execute(
                    update(UserModel).where(UserModel.id == user_id).values(**changes)
                )
            except IntegrityError as exc:
                await self.session.rollback()
                raise DuplicateEmailError() from exc
            if result.rowcount == 0:
                await self.session.rollback()
                return None
            await self.session.commit()
        return await self.get_by_id(user_id)

    async def delete(self, user_id: UUID) -> int:
        with _store_errors("Failed to delete user"):
            result = await self.session.execute(
                delete(UserModel).where(UserModel.id == user_id)
            )
            await self.session.commit()
        return result.rowcount


def _to_model(user: User) -> UserModel:
    model = UserModel(
        first_name=user.first_name,
        last_name=user.last_name,
        email=user.email,
        age=user.age,
        password=user.password,
        role=user.role,
        created_at=user.created_at,
        updated_at=user.updated_at,
    )
    if user.id is not None:
        model.id = user.id
    return model


def _to_entity(model: UserModel) -> User:
    return User(
        id=model.id,
        first_name=model.first_name,
        last_name=model.last_name,
        email=model.email,
        age=model.age,
        password=model.password,
        role=model.role,
        created_at=model.created_at,
        updated_at=model.updated_at,
    )
