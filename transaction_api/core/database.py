from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase
from sqlalchemy import text
from fastapi import Request
from typing import AsyncGenerator, Optional
import structlog

from transaction_api.core.config import Settings
from transaction_api.core.errors import RetryExhaustedError, StartupError
from transaction_api.core.retry import RetryPolicy, constant_backoff


logger = structlog.get_logger("database")


class Base(DeclarativeBase):
    """Base model class"""


class Database:
    """Connection pool shared by every request handler.

    Building one does no I/O; connections are opened on first use.
    """

    def __init__(self, engine: AsyncEngine):
        self.engine = engine
        self.session_factory = async_sessionmaker(
            engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )

    @classmethod
    def from_settings(cls, settings: Settings) -> "Database":
        engine = create_async_engine(
            settings.database_url,
            pool_size=settings.DATABASE_POOL_SIZE,
            max_overflow=settings.DATABASE_MAX_OVERFLOW,
            connect_args=settings.database_connect_args,
            echo=settings.DEBUG,
        )
        return cls(engine)

    async def ping(self) -> None:
        """Readiness probe: fails unless the server answers a trivial query"""
        async with self.engine.connect() as conn:
            await conn.execute(text("SELECT 1"))

    async def ensure_schema(self) -> None:
        """Create the tables that do not exist yet"""
        async with self.engine.begin() as conn:
            # Import models so they are registered on Base.metadata
            from transaction_api.db import models  # noqa: F401

            await conn.run_sync(Base.metadata.create_all)

    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        async with self.session_factory() as session:
            try:
                yield session
            finally:
                await session.close()

    async def dispose(self) -> None:
        await self.engine.dispose()


async def get_db(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """Database session dependency"""
    database: Database = request.app.state.database
    async for session in database.session():
        yield session


def retry_policy_from_settings(settings: Settings) -> RetryPolicy:
    return RetryPolicy(
        max_attempts=settings.DB_CONNECT_MAX_ATTEMPTS,
        backoff=constant_backoff(settings.DB_CONNECT_RETRY_DELAY),
    )


async def bootstrap_database(database: Database, retry_policy: Optional[RetryPolicy] = None) -> None:
    """Wait for the database to answer, then make sure the schema exists.

    Raises StartupError when the database never becomes reachable or the
    table cannot be created. Neither case is recoverable.
    """
    retry_policy = retry_policy or RetryPolicy()

    def log_failed_attempt(attempt: int, max_attempts: int, error: BaseException) -> None:
        logger.warning(
            "Failed to connect to DB",
            attempt=attempt,
            max_attempts=max_attempts,
            error=str(error),
        )

    try:
        await retry_policy.run(database.ping, on_failure=log_failed_attempt)
    except RetryExhaustedError as e:
        raise StartupError(
            f"Failed to connect to DB after {e.attempts} attempts: {e.last_error}"
        ) from e
    logger.info("Successfully connected to database")

    try:
        await database.ensure_schema()
    except Exception as e:
        raise StartupError(f"Failed to create table: {e}") from e
    logger.info("Database schema ready")
