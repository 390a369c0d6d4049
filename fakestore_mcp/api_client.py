"""Fake Store API Client.

Thin HTTP client for the Fake Store REST API. Every request is a GET
with bounded retries and linear backoff; failures surface as APIError.
"""

import asyncio
from dataclasses import dataclass
from typing import Any, Literal
from urllib.parse import quote, urlencode

import httpx
import structlog

from fakestore_mcp.errors import APIError, format_error
from fakestore_mcp.models import Cart, Product, User

logger = structlog.get_logger()

DEFAULT_BASE_URL = "https://fakestoreapi.com"
MAX_RETRIES = 3
RETRY_DELAY = 1.0  # seconds


@dataclass
class ListOptions:
    """Pagination and ordering options for list endpoints."""

    limit: int | None = None
    sort: Literal["asc", "desc"] | None = None


def build_query_string(options: ListOptions | None = None) -> str:
    """Build a query string from list options.

    Returns an empty string when no option is set, otherwise the encoded
    parameters prefixed with "?". Limit always precedes sort.
    """
    if options is None:
        return ""

    params: list[tuple[str, str]] = []
    if options.limit is not None:
        params.append(("limit", str(options.limit)))
    if options.sort:
        params.append(("sort", options.sort))

    query = urlencode(params)
    return f"?{query}" if query else ""


class FakeStoreAPIClient:
    """HTTP client for the Fake Store REST API.

    Provides one method per endpoint used by the MCP tools. Each method
    delegates to the retrying fetch and returns the parsed JSON payload
    unchanged.
    """

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = 30.0,
        max_retries: int = MAX_RETRIES,
        retry_delay: float = RETRY_DELAY,
        retry_client_errors: bool = True,
    ) -> None:
        """Initialize the API client.

        Args:
            base_url: Fake Store API base URL.
            timeout: Request timeout in seconds.
            max_retries: Total attempts per request.
            retry_delay: Base backoff delay in seconds. Attempt n waits n times this.
            retry_client_errors: Whether 4xx responses are retried like other failures.
        """
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.max_retries = max_retries
        self.retry_delay = retry_delay
        self.retry_client_errors = retry_client_errors
        self._client: httpx.AsyncClient | None = None

    async def __aenter__(self) -> "FakeStoreAPIClient":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.close()

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create the HTTP client."""
        if self._client is None:
            self._client = httpx.AsyncClient(
                base_url=self.base_url,
                timeout=self.timeout,
                headers={"Accept": "application/json"},
            )
        return self._client

    async def close(self) -> None:
        """Close the HTTP client."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def _fetch_with_retry(
        self,
        path: str,
        retries: int | None = None,
    ) -> Any:
        """GET a path and return the parsed JSON body.

        Non-2xx responses, transport failures and unparseable bodies all
        count as a failed attempt. Between attempts the client sleeps
        ``retry_delay * attempt`` seconds.

        Args:
            path: API endpoint path, including any query string.
            retries: Total attempts. Defaults to ``max_retries``.

        Returns:
            The decoded JSON payload.

        Raises:
            APIError: The last failure once all attempts are exhausted.
        """
        attempts = self.max_retries if retries is None else retries
        client = await self._get_client()
        last_error: APIError | None = None

        for attempt in range(1, attempts + 1):
            logger.debug("Making API request", method="GET", path=path, attempt=attempt)

            try:
                response = await client.request(method="GET", url=path)
            except httpx.RequestError as e:
                last_error = APIError(f"Failed to fetch {path}: {e}")
            else:
                status_code = response.status_code
                if 200 <= status_code < 300:
                    try:
                        return response.json()
                    except ValueError:
                        last_error = APIError(f"Invalid JSON in response from {path}")
                else:
                    last_error = APIError(
                        f"HTTP {status_code}: {response.reason_phrase}",
                        status_code=status_code,
                    )
                    if not self.retry_client_errors and 400 <= status_code < 500:
                        logger.warning(
                            "API request rejected",
                            path=path,
                            status_code=status_code,
                        )
                        break

            logger.warning(
                "API request attempt failed",
                path=path,
                attempt=attempt,
                max_attempts=attempts,
                error=format_error(last_error),
            )

            if attempt < attempts:
                await asyncio.sleep(self.retry_delay * attempt)

        raise last_error or APIError("Failed to fetch data")

    # =========================================================================
    # Product Endpoints
    # =========================================================================

    async def get_all_products(
        self,
        options: ListOptions | None = None,
    ) -> list[Product]:
        """List products, optionally limited and sorted."""
        return await self._fetch_with_retry(f"/products{build_query_string(options)}")

    async def get_product_by_id(self, product_id: int) -> Product:
        """Get a product by ID."""
        return await self._fetch_with_retry(f"/products/{product_id}")

    async def get_categories(self) -> list[str]:
        """List all product category names."""
        return await self._fetch_with_retry("/products/categories")

    async def get_products_by_category(
        self,
        category: str,
        options: ListOptions | None = None,
    ) -> list[Product]:
        """List products in a category.

        Args:
            category: Category name. Percent-encoded into the path.
            options: Optional limit and sort.

        Returns:
            Products in the category.
        """
        return await self._fetch_with_retry(
            f"/products/category/{quote(category, safe='')}"
            f"{build_query_string(options)}"
        )

    # =========================================================================
    # Cart Endpoints
    # =========================================================================

    async def get_all_carts(self, options: ListOptions | None = None) -> list[Cart]:
        """List carts, optionally limited and sorted."""
        return await self._fetch_with_retry(f"/carts{build_query_string(options)}")

    async def get_cart_by_id(self, cart_id: int) -> Cart:
        """Get a cart by ID."""
        return await self._fetch_with_retry(f"/carts/{cart_id}")

    async def get_user_carts(self, user_id: int) -> list[Cart]:
        """List the carts owned by a user."""
        return await self._fetch_with_retry(f"/carts/user/{user_id}")

    # =========================================================================
    # User Endpoints
    # =========================================================================

    async def get_all_users(self, options: ListOptions | None = None) -> list[User]:
        """List users, optionally limited and sorted."""
        return await self._fetch_with_retry(f"/users{build_query_string(options)}")

    async def get_user_by_id(self, user_id: int) -> User:
        """Get a user by ID."""
        return await self._fetch_with_retry(f"/users/{user_id}")
