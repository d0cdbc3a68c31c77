"""User Service: one parameterized statement per users operation.

Invariants:
    - Every value reaches SQL as a bound parameter (SQLAlchemy Core constructs)
    - Each function issues exactly one statement; no transaction spans two
    - "Not found" comes from rowcount == 0, never from a pre-read

Design Decisions:
    - No ORDER BY on list: rows come back in the engine's natural order
    - rowcount is the matched-row count (MySQL dialect sets CLIENT_FOUND_ROWS),
      so an update that rewrites identical values still succeeds
"""

import logging

from sqlalchemy import delete, insert, select, update

from user_api.core.domain_types import UserId
from user_api.core.errors import ResourceNotFoundError
from user_api.infrastructure.database import ConnectionManager
from user_api.models.user import create_users_table, users_table

logger = logging.getLogger(__name__)


async def create_table(db: ConnectionManager) -> None:
    """CREATE TABLE IF NOT EXISTS users."""
    await db.execute(create_users_table())
    logger.info("Users table ensured via API")


async def add_user(db: ConnectionManager, name: str, email: str) -> UserId:
    """Insert one user and return the engine-assigned id."""
    result = await db.execute(
        insert(users_table).values(name=name, email=email),
    )
    user_id = UserId(result.inserted_id)
    logger.info("User added", extra={"user_id": user_id})
    return user_id


async def list_users(db: ConnectionManager) -> list[dict]:
    result = await db.execute(
        select(users_table.c.id, users_table.c.name, users_table.c.email),
    )
    return result.rows


async def update_user(
    db: ConnectionManager, user_id: UserId, name: str, email: str,
) -> None:
    """Overwrite name and email of one user. Raises ResourceNotFoundError."""
    result = await db.execute(
        update(users_table)
        .where(users_table.c.id == user_id)
        .values(name=name, email=email),
    )
    if result.rowcount == 0:
        raise ResourceNotFoundError("User", user_id)
    logger.info("User updated", extra={"user_id": user_id})


async def delete_user(db: ConnectionManager, user_id: UserId) -> None:
    """Delete one user. Raises ResourceNotFoundError."""
    result = await db.execute(
        delete(users_table).where(users_table.c.id == user_id),
    )
    if result.rowcount == 0:
        raise ResourceNotFoundError("User", user_id)
    logger.info("User deleted", extra={"user_id": user_id})
