from typing import Optional
from pydantic import BaseModel, Field, StrictStr


class TransactionCreate(BaseModel):
    """Transaction creation request.

    Fields are decoded strictly: a quoted number, a boolean or a non-finite
    amount is a type error. Any ``id`` sent by the client is dropped; the
    database assigns it.
    """
    description: StrictStr
    # Strict float still takes JSON integers
    amount: float = Field(strict=True, allow_inf_nan=False)


class TransactionResponse(BaseModel):
    """Transaction response model"""
    id: int
    description: Optional[str] = None
    amount: Optional[float] = None
