import logging
from datetime import datetime, timezone

from users.domain.entities import User
from users.domain.repository import UserRepository

logger = logging.getLogger(__name__)

DEFAULT_USERS = [
    {"first_name": "John", "last_name": "Doe", "email": "john.doe@email.com", "age": 28, "role": "user"},
    {"first_name": "Jane", "last_name": "Smith", "email": "jane.smith@email.com", "age": 32, "role": "admin"},
    {"first_name": "Alice", "last_name": "Johnson", "email": "alice.j@email.com", "age": 25, "role": "user"},
    {"first_name": "Bob", "last_name": "Williams", "email": "bob.w@email.com", "age": 45, "role": "user"},
    {"first_name": "Charlie", "last_name": "Brown", "email": "charlie.b@email.com", "age": 38, "role": "moderator"},
    {"first_name": "Diana", "last_name": "Davis", "email": "diana.d@email.com", "age": 29, "role": "user"},
    {"first_name": "Eve", "last_name": "Martinez", "email": "eve.m@email.com", "age": 41, "role": "user"},
    {"first_name": "Frank", "last_name": "Garcia", "email": "frank.g@email.com", "age": 35, "role": "admin"},
    {"first_name": "Grace", "last_name": "Wilson", "email": "grace.w@email.com", "age": 27, "role": "user"},
    {"first_name": "Henry", "last_name": "Anderson", "email": "henry.a@email.com", "age": 50, "role": "user"},
]

DEFAULT_USER_PASSWORD = "password123"


async def seed_default_users(repo: UserRepository) -> int:
    """Insert the default users when the store is empty.

    Returns the number of users inserted.
    """
    if await repo.count() > 0:
        return 0

    now = datetime.now(timezone.utc)
    users = [
        User(password=DEFAULT_USER_PASSWORD, created_at=now, **fields)
        for fields in DEFAULT_USERS
    ]
    inserted = await repo.create_many(users)
    logger.info("Inserted %d default users", inserted)
    return inserted
