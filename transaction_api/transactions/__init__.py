from .service import (
    TransactionService,
    transaction_service
)

__all__ = [
    "TransactionService",
    "transaction_service",
]
