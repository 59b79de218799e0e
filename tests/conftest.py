"""
Test configuration and shared fixtures for the transaction service test suite.
"""
import pytest
import pytest_asyncio
import os
from typing import AsyncGenerator, Callable, Dict, Any, List
from unittest.mock import AsyncMock
import httpx
from httpx import AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession
from faker import Faker

# Set test environment before importing app modules
os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("LOG_FORMAT", "console")
if os.path.exists(".env.test"):
    from dotenv import load_dotenv
    load_dotenv(".env.test")

from transaction_api.main import create_application
from transaction_api.core.config import Settings
from transaction_api.core.database import Database
from transaction_api.core.retry import RetryPolicy, constant_backoff
from transaction_api.db.models import Transaction
from tests.test_database import create_test_engine


# Configure Faker for consistent test data
fake = Faker()
fake.seed_instance(42)  # For reproducible test data


@pytest.fixture
def test_settings() -> Settings:
    """Settings that never read a developer's .env file."""
    return Settings(_env_file=None, LOG_FORMAT="console")


@pytest_asyncio.fixture(scope="function")
async def test_engine():
    """Fresh in-memory SQLite engine per test; inserts are committed."""
    engine = create_test_engine()

    yield engine

    # Cleanup
    await engine.dispose()


@pytest_asyncio.fixture(scope="function")
async def database(test_engine) -> Database:
    """Database wrapper around the test engine with the schema in place."""
    database = Database(test_engine)
    await database.ensure_schema()
    return database


@pytest_asyncio.fixture(scope="function")
async def db_session(database: Database) -> AsyncGenerator[AsyncSession, None]:
    """Session on the same pool the HTTP handlers use."""
    async for session in database.session():
        yield session


@pytest_asyncio.fixture(scope="function")
async def client(database: Database, test_settings: Settings) -> AsyncGenerator[AsyncClient, None]:
    """Create test client with the test database injected."""
    app = create_application(settings=test_settings, database=database)

    async with AsyncClient(transport=httpx.ASGITransport(app=app), base_url="http://testserver") as test_client:
        yield test_client


# ============================================================================
# Retry Fixtures
# ============================================================================

@pytest.fixture
def fake_sleep() -> AsyncMock:
    """Stand-in for asyncio.sleep that records delays without waiting."""
    return AsyncMock()


@pytest.fixture
def instant_retry_policy(fake_sleep) -> RetryPolicy:
    """Production bounds (30 attempts, 1s apart) without wall-clock delay."""
    return RetryPolicy(max_attempts=30, backoff=constant_backoff(1.0), sleep=fake_sleep)


# ============================================================================
# Data Generator Fixtures
# ============================================================================

@pytest.fixture
def transaction_data_generator() -> Callable[..., Dict[str, Any]]:
    """Generate synthetic transaction request bodies."""
    def generate_transaction(**overrides):
        defaults = {
            "description": fake.sentence(nb_words=4),
            # Quarter steps are exact in binary floating point
            "amount": fake.random_int(min=-40000, max=40000) / 4,
        }
        defaults.update(overrides)
        return defaults

    return generate_transaction


@pytest_asyncio.fixture
async def sample_transactions(
    db_session: AsyncSession,
    transaction_data_generator
) -> List[Transaction]:
    """Create sample transactions directly in the database."""
    transactions = []

    for _ in range(3):
        data = transaction_data_generator()
        transaction = Transaction(description=data["description"], amount=data["amount"])
        transactions.append(transaction)
        db_session.add(transaction)

    await db_session.commit()

    for transaction in transactions:
        await db_session.refresh(transaction)

    return transactions
