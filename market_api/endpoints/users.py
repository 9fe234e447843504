"""User CRUD endpoints module."""
from typing import Any

from fastapi import APIRouter, Body, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from market_api.database.database import get_db
from market_api.endpoints.common import checked_id, ensure_valid, request_body
from market_api.exceptions.api_exception import NotFoundError
from market_api.schemas.common import ERROR_RESPONSES, MessageResponse
from market_api.schemas.user import UserPayload, UserResponse
from market_api.services.user_service import (
    check_user,
    create_user,
    delete_user,
    get_user,
    list_users,
    update_user,
)

router = APIRouter(prefix="/users", tags=["users"])

NOT_FOUND = "User not found"


@router.post(
    "",
    response_model=UserResponse,
    status_code=status.HTTP_201_CREATED,
    responses=ERROR_RESPONSES,
    openapi_extra=request_body(UserPayload),
)
async def create_new_user(
    payload: dict[str, Any] = Body(..., examples=[{"username": "acme-metals"}]),
    db: AsyncSession = Depends(get_db),
) -> UserResponse:
    """
    Create a new user.

    - **username**: at least 3 characters, unique across users
    """
    data = ensure_valid(await check_user(db=db, payload=payload))
    user = await create_user(db=db, data=data)
    return UserResponse.model_validate(user)


@router.get("", response_model=list[UserResponse])
async def get_users(
    db: AsyncSession = Depends(get_db),
) -> list[UserResponse]:
    """List all users."""
    users = await list_users(db=db)
    return [UserResponse.model_validate(u) for u in users]


@router.get("/{user_id}", response_model=UserResponse, responses=ERROR_RESPONSES)
async def get_user_by_id(
    user_id: str,
    db: AsyncSession = Depends(get_db),
) -> UserResponse:
    """Get a user by ID."""
    user = await get_user(db=db, user_id=checked_id(user_id, "User"))

    if user is None:
        raise NotFoundError(NOT_FOUND)

    return UserResponse.model_validate(user)


@router.put(
    "/{user_id}",
    response_model=UserResponse,
    responses=ERROR_RESPONSES,
    openapi_extra=request_body(UserPayload),
)
async def update_user_by_id(
    user_id: str,
    payload: dict[str, Any] = Body(..., examples=[{"username": "northwind"}]),
    db: AsyncSession = Depends(get_db),
) -> UserResponse:
    """Rename a user; the new username must not belong to another user."""
    parsed_id = checked_id(user_id, "User")
    data = ensure_valid(await check_user(db=db, payload=payload, exclude_id=parsed_id))
    user = await update_user(db=db, user_id=parsed_id, data=data)

    if user is None:
        raise NotFoundError(NOT_FOUND)

    return UserResponse.model_validate(user)


@router.delete("/{user_id}", response_model=MessageResponse, responses=ERROR_RESPONSES)
async def delete_user_by_id(
    user_id: str,
    db: AsyncSession = Depends(get_db),
) -> MessageResponse:
    """
    Delete a user.

    Users still referenced as vendor or customer cannot be deleted (400).
    """
    deleted = await delete_user(db=db, user_id=checked_id(user_id, "User"))

    if not deleted:
        raise NotFoundError(NOT_FOUND)

    return MessageResponse(message="User deleted")
