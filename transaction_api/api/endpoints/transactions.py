from typing import List
from fastapi import APIRouter, Depends, Request
from fastapi.exceptions import RequestValidationError
from pydantic import ValidationError
from sqlalchemy.ext.asyncio import AsyncSession

from transaction_api.core.database import get_db
from transaction_api.transactions.service import transaction_service
from transaction_api.api.schemas.transactions import TransactionCreate, TransactionResponse
from transaction_api.db.models import Transaction


router = APIRouter()


async def read_transaction_payload(request: Request) -> TransactionCreate:
    """Decode the request body as JSON whatever its Content-Type says"""

    body = await request.body()
    try:
        return TransactionCreate.model_validate_json(body)
    except ValidationError as e:
        raise RequestValidationError(
            [{**error, "loc": ("body", *error["loc"])} for error in e.errors()],
            body=body,
        )


def _to_response(transaction: Transaction) -> TransactionResponse:
    return TransactionResponse(
        id=transaction.id,
        description=transaction.description,
        amount=transaction.amount,
    )


@router.get("", response_model=List[TransactionResponse])
async def list_transactions(
    db: AsyncSession = Depends(get_db)
) -> List[TransactionResponse]:
    """List every transaction in ascending id order"""

    transactions = await transaction_service.list_transactions(db)
    return [_to_response(t) for t in transactions]


@router.post(
    "",
    response_model=TransactionResponse,
    openapi_extra={
        "requestBody": {
            "required": True,
            "content": {
                "application/json": {
                    "schema": TransactionCreate.model_json_schema(),
                },
            },
        },
    },
)
async def create_transaction(
    payload: TransactionCreate = Depends(read_transaction_payload),
    db: AsyncSession = Depends(get_db)
) -> TransactionResponse:
    """Insert a transaction and return it with the id the database assigned"""

    transaction = await transaction_service.create_transaction(
        db,
        description=payload.description,
        amount=payload.amount,
    )
    return _to_response(transaction)
