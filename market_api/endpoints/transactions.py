"""Transaction CRUD endpoints module."""
from typing import Any

from fastapi import APIRouter, Body, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from market_api.database.database import get_db
from market_api.endpoints.common import checked_id, ensure_valid, request_body
from market_api.exceptions.api_exception import NotFoundError
from market_api.schemas.common import ERROR_RESPONSES
from market_api.schemas.transaction import (
    TransactionDetailResponse,
    TransactionPayload,
    TransactionResponse,
    TransactionUpdate,
)
from market_api.services.transaction_service import (
    create_transaction,
    delete_transaction,
    get_transaction,
    list_transactions,
    update_transaction,
)
from market_api.validation.transaction import (
    validate_transaction_create,
    validate_transaction_update,
)

router = APIRouter(prefix="/transactions", tags=["transactions"])

NOT_FOUND = "Transaction not found"

_EXAMPLE = {
    "vendorId": "3f1c8a52-1f4e-4c8e-9a57-2d8f6b0c1e11",
    "customerId": "9b7e2d44-6a1b-4f0e-8c3d-5e2a7f9d0c22",
    "materialId": "c4d5e6f7-0a1b-4c2d-9e3f-4a5b6c7d8e33",
}


@router.post(
    "",
    response_model=TransactionResponse,
    status_code=status.HTTP_201_CREATED,
    responses=ERROR_RESPONSES,
    openapi_extra=request_body(TransactionPayload),
)
async def create_new_transaction(
    payload: dict[str, Any] = Body(..., examples=[_EXAMPLE]),
    db: AsyncSession = Depends(get_db),
) -> TransactionResponse:
    """
    Record a sale of a material between two users.

    Required fields:
    - **vendorId**: UUID of the selling user
    - **customerId**: UUID of the buying user
    - **materialId**: UUID of the material

    Unknown users or materials are rejected by the store with 400.
    """
    data = ensure_valid(validate_transaction_create(payload))
    transaction = await create_transaction(db=db, data=data)
    return TransactionResponse.model_validate(transaction)


@router.get("", response_model=list[TransactionDetailResponse], responses=ERROR_RESPONSES)
async def get_transactions(
    db: AsyncSession = Depends(get_db),
) -> list[TransactionDetailResponse]:
    """
    List all transactions with vendor, customer and material names.
    """
    transactions = await list_transactions(db=db)
    return [TransactionDetailResponse.model_validate(t) for t in transactions]


@router.get(
    "/{transaction_id}",
    response_model=TransactionDetailResponse,
    responses=ERROR_RESPONSES,
)
async def get_transaction_by_id(
    transaction_id: str,
    db: AsyncSession = Depends(get_db),
) -> TransactionDetailResponse:
    """Get a single transaction with vendor, customer and material names."""
    transaction = await get_transaction(
        db=db, transaction_id=checked_id(transaction_id, "Transaction")
    )

    if transaction is None:
        raise NotFoundError(NOT_FOUND)

    return TransactionDetailResponse.model_validate(transaction)


@router.put(
    "/{transaction_id}",
    response_model=TransactionResponse,
    responses=ERROR_RESPONSES,
    openapi_extra=request_body(TransactionUpdate),
)
async def update_transaction_by_id(
    transaction_id: str,
    payload: dict[str, Any] = Body(..., examples=[{"materialId": _EXAMPLE["materialId"]}]),
    db: AsyncSession = Depends(get_db),
) -> TransactionResponse:
    """
    Update a transaction.

    All fields are optional (partial update supported):
    - **vendorId**, **customerId**, **materialId**
    """
    data = ensure_valid(validate_transaction_update(transaction_id, payload))
    transaction = await update_transaction(db=db, transaction_id=data.pop("id"), data=data)

    if transaction is None:
        raise NotFoundError(NOT_FOUND)

    return TransactionResponse.model_validate(transaction)


@router.delete(
    "/{transaction_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses=ERROR_RESPONSES,
)
async def delete_transaction_by_id(
    transaction_id: str,
    db: AsyncSession = Depends(get_db),
) -> None:
    """Delete a transaction by ID."""
    deleted = await delete_transaction(
        db=db, transaction_id=checked_id(transaction_id, "Transaction")
    )

    if not deleted:
        raise NotFoundError(NOT_FOUND)
