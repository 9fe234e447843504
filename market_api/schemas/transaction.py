"""Transaction schemas module."""
from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, Field


class TransactionPayload(BaseModel):
    """Request body for creating a transaction (documentation only)."""

    vendor_id: UUID = Field(..., alias="vendorId", description="Selling user ID")
    customer_id: UUID = Field(..., alias="customerId", description="Buying user ID")
    material_id: UUID = Field(..., alias="materialId", description="Traded material ID")

    class Config:
        populate_by_name = True


class TransactionUpdate(BaseModel):
    """Request body for a partial transaction update (documentation only)."""

    vendor_id: Optional[UUID] = Field(None, alias="vendorId", description="Selling user ID")
    customer_id: Optional[UUID] = Field(
        None, alias="customerId", description="Buying user ID"
    )
    material_id: Optional[UUID] = Field(
        None, alias="materialId", description="Traded material ID"
    )

    class Config:
        populate_by_name = True


class TransactionResponse(BaseModel):
    """Response schema for a stored transaction, without joined records."""

    id: UUID = Field(..., description="Transaction ID")
    vendor_id: UUID = Field(..., alias="vendorId", description="Selling user ID")
    customer_id: UUID = Field(..., alias="customerId", description="Buying user ID")
    material_id: UUID = Field(..., alias="materialId", description="Traded material ID")
    created_at: datetime = Field(..., alias="createdAt", description="Creation time (UTC)")
    updated_at: datetime = Field(..., alias="updatedAt", description="Last change (UTC)")

    class Config:
        populate_by_name = True
        from_attributes = True


class UserSummary(BaseModel):
    """Joined user attributes."""

    username: str

    class Config:
        from_attributes = True


class MaterialSummary(BaseModel):
    """Joined material attributes."""

    material_name: str = Field(..., alias="materialName")

    class Config:
        populate_by_name = True
        from_attributes = True


class TransactionDetailResponse(TransactionResponse):
    """Transaction annotated with vendor, customer and material names."""

    vendor: Optional[UserSummary] = Field(None, description="Vendor username")
    customer: Optional[UserSummary] = Field(None, description="Customer username")
    material: Optional[MaterialSummary] = Field(None, description="Material name")
