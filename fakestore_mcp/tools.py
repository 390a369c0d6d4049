"""MCP Tools for the Fake Store API.

Defines the 9 MCP tools as thin adapters over the Fake Store REST API:
1. list_products - List products with optional limit and sort
2. get_product - Get a product by ID
3. list_categories - List product categories
4. get_products_by_category - List products in a category
5. list_carts - List carts with optional limit and sort
6. get_cart - Get a cart by ID
7. get_user_carts - List the carts of a user
8. list_users - List users with optional limit and sort
9. get_user - Get a user by ID

Every tool returns an envelope of the form
``{"content": [{"type": "text", "text": ...}]}``, with ``"isError": True``
added on failure. Tools never raise.
"""

import json
from typing import Any

import structlog

from fakestore_mcp.api_client import FakeStoreAPIClient, ListOptions
from fakestore_mcp.errors import format_error
from fakestore_mcp.validation import validate_category, validate_id, validate_limit

logger = structlog.get_logger()


def success_result(data: Any) -> dict[str, Any]:
    """Wrap a payload as a successful tool result."""
    return {
        "content": [
            {
                "type": "text",
                "text": json.dumps(data, indent=2),
            }
        ],
    }


def error_result(error: object) -> dict[str, Any]:
    """Wrap a failure as an error tool result."""
    return {
        "content": [
            {
                "type": "text",
                "text": f"Error: {format_error(error)}",
            }
        ],
        "isError": True,
    }


def _failure(tool: str, error: Exception) -> dict[str, Any]:
    logger.warning(
        "Tool failed",
        tool=tool,
        error_type=type(error).__name__,
        error=format_error(error),
    )
    return error_result(error)


class FakeStoreTools:
    """MCP Tools for the Fake Store API.

    Provides one method per MCP tool. Each method validates its arguments
    before calling the API, and returns a result envelope whether the
    call succeeds or not.
    """

    def __init__(self, api_client: FakeStoreAPIClient) -> None:
        """Initialize MCP tools.

        Args:
            api_client: Fake Store API client.
        """
        self.api = api_client

    # =========================================================================
    # Products
    # =========================================================================

    async def list_products(
        self,
        limit: int | None = None,
        sort: str | None = None,
    ) -> dict[str, Any]:
        """List products from the store.

        Args:
            limit: Maximum number of products to return.
            sort: "asc" or "desc" ordering by ID.

        Returns:
            Result envelope with the product list as JSON.
        """
        try:
            validate_limit(limit)
            products = await self.api.get_all_products(
                ListOptions(limit=limit, sort=sort)
            )
        except Exception as e:
            return _failure("list_products", e)
        return success_result(products)

    async def get_product(self, id: int) -> dict[str, Any]:
        """Get a single product by ID."""
        try:
            validate_id(id, "product")
            product = await self.api.get_product_by_id(id)
        except Exception as e:
            return _failure("get_product", e)
        return success_result(product)

    async def list_categories(self) -> dict[str, Any]:
        """List all product categories."""
        try:
            categories = await self.api.get_categories()
        except Exception as e:
            return _failure("list_categories", e)
        return success_result(categories)

    async def get_products_by_category(
        self,
        category: str,
        limit: int | None = None,
        sort: str | None = None,
    ) -> dict[str, Any]:
        """List products in a category.

        Args:
            category: Category name, e.g. "electronics".
            limit: Maximum number of products to return.
            sort: "asc" or "desc" ordering by ID.

        Returns:
            Result envelope with the product list as JSON.
        """
        try:
            validate_category(category)
            validate_limit(limit)
            products = await self.api.get_products_by_category(
                category,
                ListOptions(limit=limit, sort=sort),
            )
        except Exception as e:
            return _failure("get_products_by_category", e)
        return success_result(products)

    # =========================================================================
    # Carts
    # =========================================================================

    async def list_carts(
        self,
        limit: int | None = None,
        sort: str | None = None,
    ) -> dict[str, Any]:
        """List shopping carts."""
        try:
            validate_limit(limit)
            carts = await self.api.get_all_carts(ListOptions(limit=limit, sort=sort))
        except Exception as e:
            return _failure("list_carts", e)
        return success_result(carts)

    async def get_cart(self, id: int) -> dict[str, Any]:
        """Get a single cart by ID."""
        try:
            validate_id(id, "cart")
            cart = await self.api.get_cart_by_id(id)
        except Exception as e:
            return _failure("get_cart", e)
        return success_result(cart)

    async def get_user_carts(self, user_id: int) -> dict[str, Any]:
        """List all carts belonging to a user."""
        try:
            validate_id(user_id, "user", field="userId")
            carts = await self.api.get_user_carts(user_id)
        except Exception as e:
            return _failure("get_user_carts", e)
        return success_result(carts)

    # =========================================================================
    # Users
    # =========================================================================

    async def list_users(
        self,
        limit: int | None = None,
        sort: str | None = None,
    ) -> dict[str, Any]:
        """List users."""
        try:
            validate_limit(limit)
            users = await self.api.get_all_users(ListOptions(limit=limit, sort=sort))
        except Exception as e:
            return _failure("list_users", e)
        return success_result(users)

    async def get_user(self, id: int) -> dict[str, Any]:
        """Get a single user by ID."""
        try:
            validate_id(id, "user")
            user = await self.api.get_user_by_id(id)
        except Exception as e:
            return _failure("get_user", e)
        return success_result(user)
