"""
Error types raised by the quote assistant handlers.

Every error carries the HTTP status code it is rendered with, so handlers can
turn any of them into an ``{"error": message}`` response without a lookup table.
"""

from typing import Optional


class QuoteAssistantError(Exception):
    """Base class for errors that map onto an HTTP error response."""

    status_code = 500

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code


class MethodNotAllowed(QuoteAssistantError):
    """The request used an HTTP verb other than POST."""

    status_code = 405

    def __init__(self, message: str = "Method not allowed"):
        super().__init__(message)


class BadRequest(QuoteAssistantError):
    """A required request field is missing or malformed."""

    status_code = 400


class ConfigurationError(QuoteAssistantError):
    """A required server-side setting (such as the API key) is missing or invalid."""

    status_code = 500


class UpstreamError(QuoteAssistantError):
    """The Anthropic API answered with a non-success status."""

    def __init__(self, status_code: int, message: str = "API request failed"):
        super().__init__(message, status_code=status_code)


class InternalError(QuoteAssistantError):
    """Any other failure, including a request body that is not valid JSON."""

    status_code = 500
