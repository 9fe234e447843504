"""Material CRUD endpoints module."""
from typing import Any

from fastapi import APIRouter, Body, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from market_api.database.database import get_db
from market_api.endpoints.common import checked_id, ensure_valid, request_body
from market_api.exceptions.api_exception import NotFoundError
from market_api.schemas.common import ERROR_RESPONSES, MessageResponse
from market_api.schemas.material import MaterialPayload, MaterialResponse
from market_api.services.material_service import (
    check_material,
    create_material,
    delete_material,
    get_material,
    list_materials,
    update_material,
)

router = APIRouter(prefix="/materials", tags=["materials"])

NOT_FOUND = "Material not found"


@router.post(
    "",
    response_model=MaterialResponse,
    status_code=status.HTTP_201_CREATED,
    responses=ERROR_RESPONSES,
    openapi_extra=request_body(MaterialPayload),
)
async def create_new_material(
    payload: dict[str, Any] = Body(..., examples=[{"materialName": "Steel"}]),
    db: AsyncSession = Depends(get_db),
) -> MaterialResponse:
    """
    Create a new material.

    - **materialName**: at least 3 characters, unique across materials
    """
    data = ensure_valid(await check_material(db=db, payload=payload))
    material = await create_material(db=db, data=data)
    return MaterialResponse.model_validate(material)


@router.get("", response_model=list[MaterialResponse])
async def get_materials(
    db: AsyncSession = Depends(get_db),
) -> list[MaterialResponse]:
    """List all materials."""
    materials = await list_materials(db=db)
    return [MaterialResponse.model_validate(m) for m in materials]


@router.get("/{material_id}", response_model=MaterialResponse, responses=ERROR_RESPONSES)
async def get_material_by_id(
    material_id: str,
    db: AsyncSession = Depends(get_db),
) -> MaterialResponse:
    """Get a material by ID."""
    material = await get_material(db=db, material_id=checked_id(material_id, "Material"))

    if material is None:
        raise NotFoundError(NOT_FOUND)

    return MaterialResponse.model_validate(material)


@router.put(
    "/{material_id}",
    response_model=MaterialResponse,
    responses=ERROR_RESPONSES,
    openapi_extra=request_body(MaterialPayload),
)
async def update_material_by_id(
    material_id: str,
    payload: dict[str, Any] = Body(..., examples=[{"materialName": "Copper"}]),
    db: AsyncSession = Depends(get_db),
) -> MaterialResponse:
    """Rename a material; the new name must not belong to another material."""
    parsed_id = checked_id(material_id, "Material")
    data = ensure_valid(await check_material(db=db, payload=payload, exclude_id=parsed_id))
    material = await update_material(db=db, material_id=parsed_id, data=data)

    if material is None:
        raise NotFoundError(NOT_FOUND)

    return MaterialResponse.model_validate(material)


@router.delete("/{material_id}", response_model=MessageResponse, responses=ERROR_RESPONSES)
async def delete_material_by_id(
    material_id: str,
    db: AsyncSession = Depends(get_db),
) -> MessageResponse:
    """
    Delete a material.

    Materials still referenced by a transaction cannot be deleted (400).
    """
    deleted = await delete_material(db=db, material_id=checked_id(material_id, "Material"))

    if not deleted:
        raise NotFoundError(NOT_FOUND)

    return MessageResponse(message="Material deleted")
