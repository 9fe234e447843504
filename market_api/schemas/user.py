"""User schemas module."""
from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field


class UserPayload(BaseModel):
    """Request body for creating or renaming a user (documentation only)."""

    username: str = Field(
        ..., min_length=3, description="Unique username", examples=["acme-metals"]
    )


class UserResponse(BaseModel):
    """Response schema for a user."""

    id: UUID = Field(..., description="User ID")
    username: str = Field(..., description="Username")
    created_at: datetime = Field(..., alias="createdAt")
    updated_at: datetime = Field(..., alias="updatedAt")

    class Config:
        populate_by_name = True
        from_attributes = True
