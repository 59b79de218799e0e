"""
Test to verify the test infrastructure is working correctly.
"""
import pytest
from sqlalchemy import text


@pytest.mark.asyncio
async def test_database_setup(db_session):
    """Test that database session is working."""
    # Simple query to test database connection
    result = await db_session.execute(text("SELECT 1 as test_value"))
    row = result.fetchone()
    assert row[0] == 1


@pytest.mark.asyncio
async def test_client_setup(client):
    """Test that test client is working."""
    response = await client.get("/health")
    assert response.status_code == 200
    assert response.text == "OK"


@pytest.mark.unit
def test_fixtures_working(transaction_data_generator):
    """Test that data generators are working."""
    data = transaction_data_generator(description="Groceries")
    assert data["description"] == "Groceries"
    assert isinstance(data["amount"], float)


@pytest.mark.asyncio
async def test_sample_data_creation(sample_transactions):
    """Test that sample data fixtures create data correctly."""
    assert len(sample_transactions) == 3
    ids = [t.id for t in sample_transactions]
    assert ids == sorted(ids)
    assert len(set(ids)) == 3
