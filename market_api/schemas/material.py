"""Material schemas module."""
from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field


class MaterialPayload(BaseModel):
    """Request body for creating or renaming a material (documentation only)."""

    material_name: str = Field(
        ...,
        alias="materialName",
        min_length=3,
        description="Unique material name",
        examples=["Steel"],
    )

    class Config:
        populate_by_name = True


class MaterialResponse(BaseModel):
    """Response schema for a material."""

    id: UUID = Field(..., description="Material ID")
    material_name: str = Field(..., alias="materialName", description="Material name")
    created_at: datetime = Field(..., alias="createdAt")
    updated_at: datetime = Field(..., alias="updatedAt")

    class Config:
        populate_by_name = True
        from_attributes = True
