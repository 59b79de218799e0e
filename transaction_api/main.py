from fastapi import FastAPI
from contextlib import asynccontextmanager
from typing import Optional
import structlog

from transaction_api.core.config import Settings, get_settings
from transaction_api.core.database import Database, bootstrap_database, retry_policy_from_settings
from transaction_api.core.errors import StartupError
from transaction_api.core.logging import setup_logging
from transaction_api.core.retry import RetryPolicy
from transaction_api.api.api import api_router
from transaction_api.api.endpoints.health import health_check
from transaction_api.api.errors import register_exception_handlers


def create_application(
    settings: Optional[Settings] = None,
    database: Optional[Database] = None,
    retry_policy: Optional[RetryPolicy] = None,
) -> FastAPI:
    """Create and configure FastAPI application.

    The connection pool is built here (without connecting) and handed to the
    request handlers through ``app.state.database``.
    """

    settings = settings or get_settings()
    database = database or Database.from_settings(settings)
    retry_policy = retry_policy or retry_policy_from_settings(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Application lifespan events"""
        # Startup
        setup_logging(settings)
        logger = structlog.get_logger()

        logger.info("Starting transaction service", version=settings.APP_VERSION)

        try:
            await bootstrap_database(database, retry_policy)
        except StartupError as e:
            logger.critical("Database bootstrap failed", error=str(e))
            await database.dispose()
            raise

        logger.info(f"Server running on port {settings.PORT}...")

        yield

        # Shutdown
        logger.info("Shutting down transaction service")
        await database.dispose()

    app = FastAPI(
        title=settings.APP_NAME,
        version=settings.APP_VERSION,
        description="Transactions CRUD service",
        docs_url="/docs" if settings.DEBUG else None,
        redoc_url="/redoc" if settings.DEBUG else None,
        lifespan=lifespan,
    )
    app.state.database = database
    app.state.settings = settings

    register_exception_handlers(app)

    # Include API routes
    app.include_router(api_router)

    # Plain route with no method list: every verb gets the liveness answer
    app.add_route("/health", health_check, include_in_schema=False)

    return app
