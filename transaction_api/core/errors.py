"""Error kinds raised by the service.

Per-request errors keep the raw driver text as their message because the
HTTP layer sends it back to the client as a plain-text body.
"""
import asyncio
from typing import Optional

from sqlalchemy.exc import SQLAlchemyError


class TransactionAPIError(Exception):
    """Base class for service errors"""


class StartupError(TransactionAPIError):
    """The service cannot start serving traffic"""


class RetryExhaustedError(TransactionAPIError):
    """An operation kept failing until the retry policy gave up"""

    def __init__(self, attempts: int, last_error: Optional[BaseException]):
        self.attempts = attempts
        self.last_error = last_error
        super().__init__(f"gave up after {attempts} attempts: {last_error}")


class DatabaseError(TransactionAPIError):
    """A query, scan or insert failed while handling a request"""

    def __init__(self, original: BaseException):
        self.original = original
        super().__init__(str(original))


# What a request can hit when the database misbehaves. Connection failures
# from the driver (refused, reset, timed out) arrive unwrapped by SQLAlchemy.
DATABASE_ERRORS = (SQLAlchemyError, OSError, asyncio.TimeoutError)
