"""Fake Store MCP Server.

Exposes the Fake Store API as MCP tools for AI agent interaction.
This is a thin adapter over the Fake Store REST API.

MCP Tools:
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

import asyncio
import logging
import sys
from dataclasses import dataclass
from typing import Annotated, Any, Literal

from mcp.server import Server
from mcp.server.stdio import stdio_server
from mcp.types import (
    CallToolResult,
    TextContent,
    Tool,
)
from pydantic import BaseModel, BeforeValidator, Field, StrictInt, ValidationError
from pydantic_settings import BaseSettings
import structlog

from fakestore_mcp.api_client import FakeStoreAPIClient
from fakestore_mcp.errors import InvalidInputError
from fakestore_mcp.tools import FakeStoreTools, error_result


# ============================================================================
# Configuration
# ============================================================================


class Settings(BaseSettings):
    """MCP Server settings."""

    fakestore_api_url: str = Field(
        default="https://fakestoreapi.com",
        description="Fake Store API base URL",
    )
    request_timeout: float = Field(
        default=30.0,
        gt=0,
        description="HTTP request timeout in seconds",
    )
    max_retries: int = Field(
        default=3,
        ge=1,
        description="Total attempts per API request",
    )
    retry_delay: float = Field(
        default=1.0,
        ge=0,
        description="Base backoff delay in seconds between attempts",
    )
    retry_client_errors: bool = Field(
        default=True,
        description="Retry 4xx responses like any other failure",
    )
    log_level: str = Field(
        default="INFO",
        description="Logging level",
    )

    model_config = {
        "env_file": ".env",
        "extra": "ignore",
    }


settings = Settings()

# Configure logging. stdout carries the MCP protocol, so logs go to stderr.
logging.basicConfig(
    level=getattr(logging, settings.log_level.upper()),
    format="%(message)s",
    stream=sys.stderr,
)
structlog.configure(
    processors=[
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.JSONRenderer(),
    ],
    context_class=dict,
    logger_factory=structlog.stdlib.LoggerFactory(),
    wrapper_class=structlog.stdlib.BoundLogger,
    cache_logger_on_first_use=True,
)

logger = structlog.get_logger()


# ============================================================================
# Tool Input Schemas
# ============================================================================

# Range checks on ids and limits are advertised in the schema but enforced
# by the tool handlers, which report the offending resource and value.
POSITIVE = {"exclusiveMinimum": 0}


def _integral_float_to_int(value: Any) -> Any:
    # JSON numbers like 1.0 are integers; strings and bools stay rejected
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return value


IntegerArg = Annotated[StrictInt, BeforeValidator(_integral_float_to_int)]


class ToolInput(BaseModel):
    """Base for tool input schemas."""

    model_config = {"extra": "forbid"}


class EmptyInput(ToolInput):
    """Input schema for tools that take no arguments."""


class ListOptionsInput(ToolInput):
    """Input schema for list tools with pagination and sorting."""

    limit: IntegerArg | None = Field(
        None,
        json_schema_extra=POSITIVE,
        description="Maximum number of results to return.",
    )
    sort: Literal["asc", "desc"] | None = Field(
        None,
        description="Sort order of results: 'asc' or 'desc'.",
    )


class GetProductInput(ToolInput):
    """Input schema for get_product tool."""

    id: IntegerArg = Field(
        ...,
        json_schema_extra=POSITIVE,
        description="The product ID.",
    )


class GetProductsByCategoryInput(ListOptionsInput):
    """Input schema for get_products_by_category tool."""

    category: str = Field(
        ...,
        min_length=1,
        description="Category name, as returned by list_categories. "
        "Example: 'electronics'",
    )


class GetCartInput(ToolInput):
    """Input schema for get_cart tool."""

    id: IntegerArg = Field(
        ...,
        json_schema_extra=POSITIVE,
        description="The cart ID.",
    )


class GetUserCartsInput(ToolInput):
    """Input schema for get_user_carts tool."""

    user_id: IntegerArg = Field(
        ...,
        alias="userId",
        json_schema_extra=POSITIVE,
        description="The ID of the user whose carts to fetch.",
    )


class GetUserInput(ToolInput):
    """Input schema for get_user tool."""

    id: IntegerArg = Field(
        ...,
        json_schema_extra=POSITIVE,
        description="The user ID.",
    )


# ============================================================================
# Tool Catalog
# ============================================================================


@dataclass(frozen=True)
class ToolDefinition:
    """An MCP tool. The name doubles as the FakeStoreTools method name."""

    name: str
    description: str
    input_model: type[ToolInput]

    def to_tool(self) -> Tool:
        return Tool(
            name=self.name,
            description=self.description,
            inputSchema=self.input_model.model_json_schema(),
        )


TOOL_DEFINITIONS: list[ToolDefinition] = [
    ToolDefinition(
        name="list_products",
        description=(
            "Get all products from the store. "
            "Supports pagination with limit and sorting."
        ),
        input_model=ListOptionsInput,
    ),
    ToolDefinition(
        name="get_product",
        description="Get detailed information about a specific product by its ID.",
        input_model=GetProductInput,
    ),
    ToolDefinition(
        name="list_categories",
        description="Get all available product categories.",
        input_model=EmptyInput,
    ),
    ToolDefinition(
        name="get_products_by_category",
        description=(
            "Get all products in a specific category. "
            "Supports pagination with limit and sorting."
        ),
        input_model=GetProductsByCategoryInput,
    ),
    ToolDefinition(
        name="list_carts",
        description=(
            "Get all shopping carts. "
            "Supports pagination with limit and sorting."
        ),
        input_model=ListOptionsInput,
    ),
    ToolDefinition(
        name="get_cart",
        description="Get detailed information about a specific cart by its ID.",
        input_model=GetCartInput,
    ),
    ToolDefinition(
        name="get_user_carts",
        description="Get all shopping carts for a specific user by their user ID.",
        input_model=GetUserCartsInput,
    ),
    ToolDefinition(
        name="list_users",
        description="Get all users. Supports pagination with limit and sorting.",
        input_model=ListOptionsInput,
    ),
    ToolDefinition(
        name="get_user",
        description="Get detailed information about a specific user by their ID.",
        input_model=GetUserInput,
    ),
]

TOOLS_BY_NAME: dict[str, ToolDefinition] = {t.name: t for t in TOOL_DEFINITIONS}


# ============================================================================
# Dispatch
# ============================================================================


def summarize_validation_error(error: ValidationError) -> str:
    """Render pydantic errors as "field: message (got value)" pairs."""
    parts = []
    for err in error.errors():
        location = ".".join(str(part) for part in err["loc"]) or "arguments"
        if err["type"] == "missing":
            parts.append(f"{location}: {err['msg']}")
        else:
            parts.append(f"{location}: {err['msg']} (got {err['input']!r})")
    return "; ".join(parts)


async def dispatch_tool(
    tools: FakeStoreTools,
    name: str,
    arguments: dict[str, Any] | None,
) -> dict[str, Any]:
    """Validate arguments against the tool's schema and run the tool.

    Always returns a result envelope. Unknown tools and malformed
    arguments produce an error envelope without touching the API.
    """
    logger.info("Tool called", tool=name, arguments=arguments)

    definition = TOOLS_BY_NAME.get(name)
    if definition is None:
        logger.warning("Unknown tool requested", tool=name)
        return error_result(InvalidInputError(f"Unknown tool: {name}"))

    try:
        input_data = definition.input_model.model_validate(arguments or {})
    except ValidationError as e:
        summary = summarize_validation_error(e)
        logger.info("Tool arguments rejected", tool=name, errors=summary)
        return error_result(
            InvalidInputError(f"Invalid arguments for {name}: {summary}")
        )

    handler = getattr(tools, name)
    try:
        result = await handler(**input_data.model_dump(exclude_none=True))
    except Exception as e:
        logger.error("Tool execution failed", tool=name, error_type=type(e).__name__)
        result = error_result(e)

    logger.info("Tool completed", tool=name, is_error=result.get("isError", False))
    return result


def to_call_tool_result(envelope: dict[str, Any]) -> CallToolResult:
    """Convert a result envelope into an MCP CallToolResult."""
    return CallToolResult(
        content=[
            TextContent(type="text", text=block["text"])
            for block in envelope["content"]
        ],
        isError=envelope.get("isError", False),
    )


# ============================================================================
# MCP Server Implementation
# ============================================================================


def create_api_client(config: Settings | None = None) -> FakeStoreAPIClient:
    """Create an API client from settings."""
    config = config or settings
    return FakeStoreAPIClient(
        base_url=config.fakestore_api_url,
        timeout=config.request_timeout,
        max_retries=config.max_retries,
        retry_delay=config.retry_delay,
        retry_client_errors=config.retry_client_errors,
    )


def create_mcp_server(tools: FakeStoreTools | None = None) -> Server:
    """Create and configure the MCP server with all tools.

    Args:
        tools: Tool implementations. Created from settings on first use
            when omitted.
    """
    server = Server("fakestore-mcp")

    _tools_instance = tools

    def get_tools() -> FakeStoreTools:
        """Get or create the FakeStoreTools instance."""
        nonlocal _tools_instance
        if _tools_instance is None:
            _tools_instance = FakeStoreTools(api_client=create_api_client())
        return _tools_instance

    @server.list_tools()
    async def list_tools() -> list[Tool]:
        """List all available MCP tools."""
        return [definition.to_tool() for definition in TOOL_DEFINITIONS]

    # Handlers validate their own arguments so callers get domain messages
    @server.call_tool(validate_input=False)
    async def call_tool(name: str, arguments: dict | None) -> CallToolResult:
        """Handle tool invocation."""
        envelope = await dispatch_tool(get_tools(), name, arguments)
        return to_call_tool_result(envelope)

    return server


async def run_server() -> None:
    """Run the MCP server using stdio transport."""
    logger.info(
        "Starting Fake Store MCP Server",
        fakestore_api_url=settings.fakestore_api_url,
        max_retries=settings.max_retries,
    )

    async with create_api_client() as api_client:
        server = create_mcp_server(FakeStoreTools(api_client=api_client))

        async with stdio_server() as (read_stream, write_stream):
            await server.run(
                read_stream,
                write_stream,
                server.create_initialization_options(),
            )

    logger.info("Fake Store MCP Server stopped")


def main() -> None:
    """Run the MCP server.

    Entry point for the MCP server. Uses stdio transport for
    communication with AI agents.
    """
    try:
        asyncio.run(run_server())
    except KeyboardInterrupt:
        logger.info("Interrupted, shutting down")


if __name__ == "__main__":
    main()
