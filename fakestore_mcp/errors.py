"""Error types and user-facing error formatting.

Every failure that reaches a tool handler is turned into a short,
stable message by ``format_error`` before it is shown to the agent.
"""


NOT_FOUND_MESSAGE = "Resource not found. Please check the ID and try again."
SERVER_ERROR_MESSAGE = "Server error. Please try again later."
NETWORK_ERROR_MESSAGE = "Network error. Please check your internet connection."
UNEXPECTED_ERROR_MESSAGE = "An unexpected error occurred."


class FakeStoreError(Exception):
    """Base class for all Fake Store MCP errors."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class APIError(FakeStoreError):
    """Raised when a request to the Fake Store API fails.

    The status code is only set for HTTP status failures. Transport and
    parse failures leave it as None.
    """

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class InvalidInputError(FakeStoreError):
    """Raised when tool arguments fail validation before any request."""

    def __init__(self, message: str, field: str | None = None) -> None:
        super().__init__(message)
        self.field = field


def format_error(error: object) -> str:
    """Convert any error into a user-friendly message.

    Classification looks at the message text, since the status code of a
    failed request is only encoded there.
    """
    if not isinstance(error, Exception):
        return UNEXPECTED_ERROR_MESSAGE

    message = str(error)
    if "HTTP 404" in message:
        return NOT_FOUND_MESSAGE
    if "HTTP 500" in message:
        return SERVER_ERROR_MESSAGE
    if "Failed to fetch" in message:
        return NETWORK_ERROR_MESSAGE
    return message
