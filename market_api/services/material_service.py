"""Material service module.

Provides CRUD operations for materials, plus the lookups other services
use to reference them: fetch by ID and name-uniqueness check.
"""
import logging
from typing import Any, Mapping, Optional, Sequence
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from market_api.exceptions.api_exception import ConstraintError, StoreError
from market_api.models.material import Material
from market_api.validation.material import MATERIAL_NAME_NOT_UNIQUE, validate_material
from market_api.validation.rules import FieldError, ValidationResult

logger = logging.getLogger(__name__)


async def get_material(db: AsyncSession, material_id: UUID) -> Optional[Material]:
    """Get a material by ID."""
    try:
        return await db.get(Material, material_id)
    except SQLAlchemyError as exc:
        raise StoreError(detail=str(exc)) from exc


async def material_name_exists(
    db: AsyncSession,
    material_name: str,
    exclude_id: Optional[UUID] = None,
) -> bool:
    """True if another material already uses this name."""
    query = select(Material.id).where(Material.material_name == material_name)
    if exclude_id is not None:
        query = query.where(Material.id != exclude_id)
    try:
        result = await db.execute(query.limit(1))
    except SQLAlchemyError as exc:
        raise StoreError(detail=str(exc)) from exc
    return result.first() is not None


async def check_material(
    db: AsyncSession,
    payload: Mapping[str, Any],
    exclude_id: Optional[UUID] = None,
) -> ValidationResult:
    """Run the field rules, then the name-uniqueness pre-check.

    The pre-check is advisory: the unique index on ``material_name`` still
    rejects a duplicate inserted concurrently.
    """
    result = validate_material(payload)
    if not result.ok:
        return result

    if await material_name_exists(db, result.data["material_name"], exclude_id):
        return ValidationResult(
            errors=[FieldError(field="materialName", message=MATERIAL_NAME_NOT_UNIQUE)]
        )
    return result


async def _commit(db: AsyncSession, action: str) -> None:
    try:
        await db.commit()
    except IntegrityError as exc:
        await db.rollback()
        logger.warning("Material %s rejected by constraint: %s", action, exc.orig)
        raise ConstraintError(detail=str(exc.orig)) from exc
    except SQLAlchemyError as exc:
        await db.rollback()
        logger.error("Material %s failed: %s", action, exc)
        raise StoreError(detail=str(exc)) from exc


async def create_material(db: AsyncSession, data: dict[str, Any]) -> Material:
    """Create a material from a validated payload."""
    material = Material(material_name=data["material_name"])
    db.add(material)
    await _commit(db, "create")
    await db.refresh(material)

    logger.info("Created material %s (%s)", material.id, material.material_name)
    return material


async def list_materials(db: AsyncSession) -> Sequence[Material]:
    """List all materials."""
    try:
        result = await db.execute(select(Material))
    except SQLAlchemyError as exc:
        raise StoreError(detail=str(exc)) from exc
    return result.scalars().all()


async def update_material(
    db: AsyncSession,
    material_id: UUID,
    data: dict[str, Any],
) -> Optional[Material]:
    """Rename a material. Returns None if it does not exist."""
    material = await get_material(db, material_id)
    if material is None:
        return None

    material.material_name = data["material_name"]
    await _commit(db, "update")
    await db.refresh(material)
    return material


async def delete_material(db: AsyncSession, material_id: UUID) -> bool:
    """Delete a material. Returns True if deleted.

    A material still referenced by a transaction is kept by the store and
    the attempt fails with ConstraintError.
    """
    material = await get_material(db, material_id)
    if material is None:
        return False

    await db.delete(material)
    await _commit(db, "delete")

    logger.info("Deleted material %s", material_id)
    return True
