"""Input validation for tool arguments.

These checks run before any request is made, so a bad argument never
costs a network round trip.
"""

from typing import Any

from fakestore_mcp.errors import InvalidInputError


def _is_positive_int(value: Any) -> bool:
    # bool is a subclass of int but never a valid identifier or limit
    return isinstance(value, int) and not isinstance(value, bool) and value > 0


def validate_id(value: Any, resource_name: str, field: str = "id") -> None:
    """Validate that an ID is a positive integer.

    Args:
        value: The identifier supplied by the caller.
        resource_name: Resource the ID refers to, e.g. "product".
        field: Argument name reported on failure.

    Raises:
        InvalidInputError: If the ID is not a positive integer.
    """
    if not _is_positive_int(value):
        raise InvalidInputError(
            f"Invalid {resource_name} ID: {value}. Must be a positive integer.",
            field=field,
        )


def validate_limit(limit: Any = None) -> None:
    """Validate the optional limit parameter."""
    if limit is None:
        return
    if not _is_positive_int(limit):
        raise InvalidInputError(
            f"Invalid limit: {limit}. Must be a positive integer.",
            field="limit",
        )


def validate_category(category: Any) -> None:
    """Validate that a category name is a non-empty string."""
    if not isinstance(category, str) or not category.strip():
        raise InvalidInputError(
            f"Invalid category: {category!r}. Must be a non-empty string.",
            field="category",
        )
