from sqlalchemy import Integer, Numeric, Text
from sqlalchemy.orm import Mapped, mapped_column
from decimal import Decimal
from typing import Optional

from transaction_api.core.database import Base


class Transaction(Base):
    """Transaction model"""
    __tablename__ = "transactions"

    # Assigned by the database (SERIAL on PostgreSQL), never by the application
    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    description: Mapped[Optional[str]] = mapped_column(Text)
    amount: Mapped[Optional[Decimal]] = mapped_column(Numeric)

    def __repr__(self):
        return f"<Transaction(id={self.id}, description={self.description!r}, amount={self.amount})>"
