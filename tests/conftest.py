"""Pytest configuration and fixtures for MCP server tests."""

from unittest.mock import AsyncMock, MagicMock

import pytest
import pytest_asyncio

from fakestore_mcp.api_client import FakeStoreAPIClient
from fakestore_mcp.tools import FakeStoreTools


@pytest.fixture
def mock_api_client() -> MagicMock:
    """Create a mock Fake Store API client."""
    client = MagicMock(spec=FakeStoreAPIClient)

    # Make all methods async
    client.get_all_products = AsyncMock()
    client.get_product_by_id = AsyncMock()
    client.get_categories = AsyncMock()
    client.get_products_by_category = AsyncMock()
    client.get_all_carts = AsyncMock()
    client.get_cart_by_id = AsyncMock()
    client.get_user_carts = AsyncMock()
    client.get_all_users = AsyncMock()
    client.get_user_by_id = AsyncMock()
    client.close = AsyncMock()

    return client


@pytest.fixture
def fakestore_tools(mock_api_client: MagicMock) -> FakeStoreTools:
    """Create FakeStoreTools instance with a mocked client."""
    return FakeStoreTools(api_client=mock_api_client)


@pytest_asyncio.fixture
async def api_client():
    """Create a real API client. Tests patch out the backoff sleep."""
    client = FakeStoreAPIClient(
        base_url="https://fakestoreapi.test",
        retry_delay=0.5,
    )
    yield client
    await client.close()


@pytest.fixture
def sample_product() -> dict:
    """A product as returned by the Fake Store API."""
    return {
        "id": 1,
        "title": "X",
        "price": 9.99,
        "description": "d",
        "category": "c",
        "image": "u",
        "rating": {"rate": 4.5, "count": 10},
    }


@pytest.fixture
def sample_cart() -> dict:
    """A cart as returned by the Fake Store API."""
    return {
        "id": 5,
        "userId": 3,
        "date": "2020-03-01T00:00:00.000Z",
        "products": [
            {"productId": 7, "quantity": 1},
            {"productId": 8, "quantity": 2},
        ],
    }


@pytest.fixture
def sample_user() -> dict:
    """A user as returned by the Fake Store API."""
    return {
        "id": 2,
        "email": "morrison@gmail.com",
        "username": "mor_2314",
        "name": {"firstname": "david", "lastname": "morrison"},
        "address": {
            "street": "Lovers Ln",
            "number": 7267,
            "city": "kilcoole",
            "zipcode": "12926-3874",
            "geolocation": {"lat": "-37.3159", "long": "81.1496"},
        },
        "phone": "1-570-236-7033",
    }


def make_response(
    status_code: int = 200,
    data=None,
    reason_phrase: str = "OK",
) -> MagicMock:
    """Create a mock httpx response."""
    response = MagicMock()
    response.status_code = status_code
    response.reason_phrase = reason_phrase
    response.json.return_value = data
    return response


@pytest.fixture
def response_factory():
    """Factory for mock httpx responses."""
    return make_response
