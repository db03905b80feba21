from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from shared.dependencies import get_db
from users.application.mutations import create_user, delete_user, update_user
from users.application.queries import get_user, list_users
from users.infrastructure.user_repository import DbUserRepository
from users.interfaces.schemas import (
    CreateUserRequest,
    DeleteUserResponse,
    UpdateUserRequest,
    UserResponse,
)

router = APIRouter(prefix="/users", tags=["users"])


@router.get("", response_model=list[UserResponse], response_model_exclude_none=True)
async def list_all(
    sort_by: str | None = Query(default=None, alias="sortBy"),
    order: str | None = Query(default=None),
    search: str | None = Query(default=None),
    db: AsyncSession = Depends(get_db),
):
    repo = DbUserRepository(db)
    return await list_users(repo, search=search, sort_by=sort_by, order=order)


@router.get("/{user_id}", response_model=UserResponse, response_model_exclude_none=True)
async def get_one(user_id: str, db: AsyncSession = Depends(get_db)):
    repo = DbUserRepository(db)
    return await get_user(repo, user_id)


@router.post(
    "", response_model=UserResponse, response_model_exclude_none=True, status_code=201
)
async def create(body: CreateUserRequest, db: AsyncSession = Depends(get_db)):
    repo = DbUserRepository(db)
    return await create_user(
        repo,
        first_name=body.first_name,
        last_name=body.last_name,
        email=body.email,
        age=body.age,
        password=body.password,
        role=body.role,
    )


@router.put("/{user_id}", response_model=UserResponse, response_model_exclude_none=True)
async def update(
    user_id: str, body: UpdateUserRequest, db: AsyncSession = Depends(get_db)
):
    repo = DbUserRepository(db)
    return await update_user(
        repo,
        user_id=user_id,
        first_name=body.first_name,
        last_name=body.last_name,
        email=body.email,
        age=body.age,
        password=body.password,
        role=body.role,
    )


@router.delete("/{user_id}", response_model=DeleteUserResponse)
async def delete(user_id: str, db: AsyncSession = Depends(get_db)):
    repo = DbUserRepository(db)
    deleted = await delete_user(repo, user_id)
    return DeleteUserResponse(message="User deleted successfully", deleted_count=deleted)
