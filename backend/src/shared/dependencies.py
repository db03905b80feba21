from collections.abc import AsyncGenerator

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from shared.infrastructure.database import Database


def get_database(request: Request) -> Database:
    return request.app.state.database


async def get_db(
    database: Database = Depends(get_database),
) -> AsyncGenerator[AsyncSession, None]:
    async with database.session() as session:
        yield session
