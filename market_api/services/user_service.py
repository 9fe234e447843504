"""User service module.

CRUD for users, who appear on transactions as vendor or customer, and
the lookups used when other records reference them.
"""
import logging
from typing import Any, Mapping, Optional, Sequence
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from market_api.exceptions.api_exception import ConstraintError, StoreError
from market_api.models.user import User
from market_api.validation.rules import FieldError, ValidationResult
from market_api.validation.user import USERNAME_NOT_UNIQUE, validate_user

logger = logging.getLogger(__name__)


async def get_user(db: AsyncSession, user_id: UUID) -> Optional[User]:
    """Get a user by ID."""
    try:
        return await db.get(User, user_id)
    except SQLAlchemyError as exc:
        raise StoreError(detail=str(exc)) from exc


async def username_exists(
    db: AsyncSession,
    username: str,
    exclude_id: Optional[UUID] = None,
) -> bool:
    """True if another user already has this username."""
    query = select(User.id).where(User.username == username)
    if exclude_id is not None:
        query = query.where(User.id != exclude_id)
    try:
        result = await db.execute(query.limit(1))
    except SQLAlchemyError as exc:
        raise StoreError(detail=str(exc)) from exc
    return result.first() is not None


async def check_user(
    db: AsyncSession,
    payload: Mapping[str, Any],
    exclude_id: Optional[UUID] = None,
) -> ValidationResult:
    """Field rules followed by the advisory username-uniqueness check."""
    result = validate_user(payload)
    if not result.ok:
        return result

    if await username_exists(db, result.data["username"], exclude_id):
        return ValidationResult(
            errors=[FieldError(field="username", message=USERNAME_NOT_UNIQUE)]
        )
    return result


async def _commit(db: AsyncSession, action: str) -> None:
    try:
        await db.commit()
    except IntegrityError as exc:
        await db.rollback()
        logger.warning("User %s rejected by constraint: %s", action, exc.orig)
        raise ConstraintError(detail=str(exc.orig)) from exc
    except SQLAlchemyError as exc:
        await db.rollback()
        logger.error("User %s failed: %s", action, exc)
        raise StoreError(detail=str(exc)) from exc


async def create_user(db: AsyncSession, data: dict[str, Any]) -> User:
    """Create a user from a validated payload."""
    user = User(username=data["username"])
    db.add(user)
    await _commit(db, "create")
    await db.refresh(user)

    logger.info("Created user %s (%s)", user.id, user.username)
    return user


async def list_users(db: AsyncSession) -> Sequence[User]:
    """List all users."""
    try:
        result = await db.execute(select(User))
    except SQLAlchemyError as exc:
        raise StoreError(detail=str(exc)) from exc
    return result.scalars().all()


async def update_user(
    db: AsyncSession,
    user_id: UUID,
    data: dict[str, Any],
) -> Optional[User]:
    """Rename a user. Returns None if it does not exist."""
    user = await get_user(db, user_id)
    if user is None:
        return None

    user.username = data["username"]
    await _commit(db, "update")
    await db.refresh(user)
    return user


async def delete_user(db: AsyncSession, user_id: UUID) -> bool:
    """Delete a user. Returns True if deleted; referenced users are kept."""
    user = await get_user(db, user_id)
    if user is None:
        return False

    await db.delete(user)
    await _commit(db, "delete")

    logger.info("Deleted user %s", user_id)
    return True
