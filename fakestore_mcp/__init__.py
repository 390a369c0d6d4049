"""Fake Store MCP Server.

Exposes the Fake Store e-commerce API as MCP tools for AI agent interaction.

This package provides:
- MCP tools for browsing products, carts and users
- Thin adapter layer over the Fake Store REST API
- Retries with linear backoff and friendly error messages

Tools:
1. list_products - List products with optional limit and sort
2. get_product - Get a product by ID
3. list_categories - List product categories
4. get_products_by_category - List products in a category
5. list_carts - List carts with optional limit and sort
6. get_cart - Get a cart by ID
7. get_user_carts - List the carts of a user
8. list_users - List users with optional limit and sort
9. get_user - Get a user by ID
"""

__version__ = "1.0.0"
