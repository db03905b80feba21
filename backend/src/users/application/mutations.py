import logging
from datetime import datetime, timezone
from typing import Any
from uuid import UUID

from shared.config import settings
from shared.exceptions import DuplicateEmailError, NotFoundError, ValidationError
from users.application.queries import parse_user_id
from users.domain.entities import User
from users.domain.repository import UserRepository

logger = logging.getLogger(__name__)

REQUIRED_FIELDS_MESSAGE = "firstName, lastName, email, and age are required"


async def create_user(
    repo: UserRepository,
    first_name: str | None,
    last_name: str | None,
    email: str | None,
    age: int | str | None,
    password: str | None = None,
    role: str | None = None,
) -> User:
    if not first_name or not last_name or not email or age is None or age == "":
        raise ValidationError(REQUIRED_FIELDS_MESSAGE)

    if await repo.get_by_email(email):
        logger.warning("Rejected duplicate email %s", email)
        raise DuplicateEmailError()

    user = User(
        first_name=first_name,
        last_name=last_name,
        email=email,
        age=_coerce_age(age),
        password=password or settings.DEFAULT_PASSWORD,
        role=role or settings.DEFAULT_ROLE,
        created_at=_now(),
    )
    created = await repo.create(user)
    logger.info("Created user %s", created.id)
    return created


async def update_user(
    repo: UserRepository,
    user_id: str | UUID,
    first_name: str | None = None,
    last_name: str | None = None,
    email: str | None = None,
    age: int | str | None = None,
    password: str | None = None,
    role: str | None = None,
) -> User:
    """Merge the truthy arguments into the stored user.

    Falsy values (``None``, ``""``, ``0``) are skipped and keep the stored
    value. ``updated_at`` is stamped on every call. Email uniqueness is not
    checked here; the store's unique constraint rejects collisions.
    """
    uid = parse_user_id(user_id)

    changes: dict[str, Any] = {}
    if first_name:
        changes["first_name"] = first_name
    if last_name:
        changes["last_name"] = last_name
    if email:
        changes["email"] = email
    if age:
        changes["age"] = _coerce_age(age)
    if password:
        changes["password"] = password
    if role:
        changes["role"] = role
    changes["updated_at"] = _now()

    user = await repo.update(uid, changes)
    if not user:
        logger.warning("Update of unknown user %s", uid)
        raise NotFoundError("User")
    logger.info("Updated user %s (%s)", uid, ", ".join(sorted(changes)))
    return user


async def delete_user(repo: UserRepository, user_id: str | UUID) -> int:
    uid = parse_user_id(user_id)
    deleted = await repo.delete(uid)
    if deleted == 0:
        logger.warning("Delete of unknown user %s", uid)
        raise NotFoundError("User")
    logger.info("Deleted user %s", uid)
    return deleted


def _coerce_age(age: int | str) -> int:
    try:
        return int(age)
    except (TypeError, ValueError):
        raise ValidationError("age must be an integer")


def _now() -> datetime:
    return datetime.now(timezone.utc)
