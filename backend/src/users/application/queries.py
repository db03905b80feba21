from uuid import UUID

from shared.exceptions import InvalidIdentifierError, NotFoundError
from users.domain.entities import User, UserQuery
from users.domain.repository import UserRepository


def parse_user_id(raw: str | UUID) -> UUID:
    if isinstance(raw, UUID):
        return raw
    try:
        return UUID(raw)
    except (TypeError, ValueError):
        raise InvalidIdentifierError(str(raw))


async def list_users(
    repo: UserRepository,
    search: str | None = None,
    sort_by: str | None = None,
    order: str | None = "asc",
) -> list[User]:
    """Return users whose first or last name contains ``search``.

    Matching is case-insensitive. ``order`` is descending only when it is
    exactly ``"desc"``. An unrecognised ``sort_by`` leaves the result in
    store order.
    """
    query = UserQuery(
        search=search or None,
        sort_by=sort_by or None,
        descending=order == "desc",
    )
    return await repo.find(query)


async def get_user(repo: UserRepository, user_id: str | UUID) -> User:
    user = await repo.get_by_id(parse_user_id(user_id))
    if not user:
        raise NotFoundError("User")
    return user
