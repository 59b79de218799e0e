from typing import List
from decimal import Decimal
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
import structlog

from transaction_api.core.errors import DATABASE_ERRORS, DatabaseError
from transaction_api.db.models import Transaction


class TransactionService:
    """Reads and inserts rows of the transactions table.

    Each call is a single SQL statement. Driver and connection errors surface
    as DatabaseError.
    """

    def __init__(self):
        self.logger = structlog.get_logger("TransactionService")

    async def list_transactions(self, db: AsyncSession) -> List[Transaction]:
        """All transactions, oldest id first"""

        stmt = select(Transaction).order_by(Transaction.id)

        try:
            result = await db.execute(stmt)
            return list(result.scalars().all())
        except DATABASE_ERRORS as e:
            raise DatabaseError(e) from e

    async def create_transaction(
        self,
        db: AsyncSession,
        description: str,
        amount: float
    ) -> Transaction:
        """Insert one transaction and return it with its assigned id"""

        # str() keeps the posted digits instead of the binary float expansion
        transaction = Transaction(description=description, amount=Decimal(str(amount)))

        try:
            db.add(transaction)
            await db.commit()
        except DATABASE_ERRORS as e:
            await db.rollback()
            raise DatabaseError(e) from e

        self.logger.debug("Created transaction", transaction_id=transaction.id)
        return transaction


# Global service instance
transaction_service = TransactionService()
