"""Transaction service module.

Record manager for transactions. Writes rely on the store's foreign keys
to reject unknown vendors, customers and materials; reads join in the
vendor and customer usernames and the material name.

Every store failure on this path is reported as a client error (400),
including failures that are not constraint violations.
"""
import logging
from datetime import timedelta
from typing import Any, Optional, Sequence
from uuid import UUID

from fastapi import status
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import joinedload

from market_api.database.database import utcnow
from market_api.exceptions.api_exception import ConstraintError, StoreError
from market_api.models.transaction import Transaction

logger = logging.getLogger(__name__)

STORE_ERROR_STATUS = status.HTTP_400_BAD_REQUEST

_JOINED = (
    joinedload(Transaction.vendor),
    joinedload(Transaction.customer),
    joinedload(Transaction.material),
)


async def _commit(db: AsyncSession, action: str) -> None:
    """Commit the pending write, translating store failures."""
    try:
        await db.commit()
    except IntegrityError as exc:
        await db.rollback()
        logger.warning("Transaction %s rejected by constraint: %s", action, exc.orig)
        raise ConstraintError(detail=str(exc.orig)) from exc
    except SQLAlchemyError as exc:
        await db.rollback()
        logger.error("Transaction %s failed: %s", action, exc)
        raise StoreError(detail=str(exc), status_code=STORE_ERROR_STATUS) from exc


async def create_transaction(
    db: AsyncSession,
    data: dict[str, Any],
) -> Transaction:
    """Insert a transaction from a validated payload."""
    now = utcnow()
    transaction = Transaction(
        vendor_id=data["vendor_id"],
        customer_id=data["customer_id"],
        material_id=data["material_id"],
        created_at=now,
        updated_at=now,
    )
    db.add(transaction)
    await _commit(db, "create")
    await db.refresh(transaction)

    logger.info("Created transaction %s", transaction.id)
    return transaction


async def list_transactions(db: AsyncSession) -> Sequence[Transaction]:
    """All transactions with vendor, customer and material joined in."""
    try:
        result = await db.execute(select(Transaction).options(*_JOINED))
    except SQLAlchemyError as exc:
        logger.error("Listing transactions failed: %s", exc)
        raise StoreError(detail=str(exc), status_code=STORE_ERROR_STATUS) from exc
    return result.scalars().unique().all()


async def get_transaction(
    db: AsyncSession,
    transaction_id: UUID,
) -> Optional[Transaction]:
    """Get a transaction by ID with joined records."""
    query = select(Transaction).options(*_JOINED).where(Transaction.id == transaction_id)
    try:
        result = await db.execute(query)
    except SQLAlchemyError as exc:
        logger.error("Loading transaction %s failed: %s", transaction_id, exc)
        raise StoreError(detail=str(exc), status_code=STORE_ERROR_STATUS) from exc
    return result.scalar_one_or_none()


async def _find(db: AsyncSession, transaction_id: UUID) -> Optional[Transaction]:
    try:
        return await db.get(Transaction, transaction_id)
    except SQLAlchemyError as exc:
        raise StoreError(detail=str(exc), status_code=STORE_ERROR_STATUS) from exc


async def update_transaction(
    db: AsyncSession,
    transaction_id: UUID,
    data: dict[str, Any],
) -> Optional[Transaction]:
    """Merge the given references onto an existing transaction.

    Returns None when no transaction has this ID. ``updated_at`` always
    moves forward, even if the clock has not ticked since the last write.
    """
    transaction = await _find(db, transaction_id)
    if transaction is None:
        return None

    for field in ("vendor_id", "customer_id", "material_id"):
        if field in data:
            setattr(transaction, field, data[field])

    now = utcnow()
    if now <= transaction.updated_at:
        now = transaction.updated_at + timedelta(microseconds=1)
    transaction.updated_at = now

    await _commit(db, "update")
    await db.refresh(transaction)
    return transaction


async def delete_transaction(
    db: AsyncSession,
    transaction_id: UUID,
) -> bool:
    """Delete a transaction. Returns True if deleted."""
    transaction = await _find(db, transaction_id)
    if transaction is None:
        return False

    await db.delete(transaction)
    await _commit(db, "delete")

    logger.info("Deleted transaction %s", transaction_id)
    return True
