"""Custom exceptions for Weavex.

This module defines a hierarchy of exceptions for different error categories,
making error handling more specific and maintainable.
"""

from __future__ import annotations


# ============================================================================
# Base Exception
# ============================================================================


class WeavexError(Exception):
    """Base exception for all Weavex errors.

    All custom exceptions in this project inherit from this base class so the
    command-line entry point can report any of them with a single except clause.
    """


# ============================================================================
# Configuration Errors
# ============================================================================


class ConfigurationError(WeavexError):
    """Raised when configuration values are invalid.

    Examples:
        - Timeout not strictly positive
        - max_results outside the range accepted by the search API
        - Unknown configuration keys
    """


class MissingApiKeyError(ConfigurationError):
    """Raised when no API key is available for the web search/fetch API."""

    def __init__(self, message: str | None = None) -> None:
        super().__init__(
            message
            or "API key not found. Set OLLAMA_API_KEY environment variable or use --api-key flag.\n"
            "Get your key at: https://ollama.com"
        )


# ============================================================================
# Collaborator Errors
# ============================================================================


class CollaboratorError(WeavexError):
    """Base class for failures talking to the chat or web APIs."""


class TransportError(CollaboratorError):
    """Raised when a request could not reach its endpoint.

    Examples:
        - Connection refused (local Ollama server not running)
        - DNS resolution failures
        - Request timeouts
    """


class ApiError(CollaboratorError):
    """Raised when an endpoint answers with a non-2xx status.

    The status code and the raw response body are kept for diagnostics.
    """

    def __init__(self, status: int, message: str) -> None:
        self.status = status
        self.message = message
        super().__init__(f"API returned error: {status} - {message}")


class InvalidResponseError(CollaboratorError):
    """Raised when a 2xx response body cannot be decoded."""


# ============================================================================
# Tool Call Errors
# ============================================================================


class ToolError(WeavexError):
    """Base class for problems with a model-issued tool call."""

    def __init__(self, tool_name: str, message: str) -> None:
        self.tool_name = tool_name
        super().__init__(message)


class InvalidArgumentsError(ToolError):
    """Raised when the model supplied missing or malformed tool arguments.

    Under the default policy this ends the run.
    """


class UnknownToolError(ToolError):
    """Raised when the model invoked a tool the registry does not know.

    The agent loop reports this back to the model as tool output instead of
    failing the run.
    """


# ============================================================================
# Command Errors
# ============================================================================


class CommandError(WeavexError):
    """Raised when a CLI command fails.

    The message names the step that failed and its cause, e.g.
    "Search request failed: API returned error: 401 - unauthorized".
    """


# ============================================================================
# Exports
# ============================================================================


__all__ = [
    # Base
    "WeavexError",
    # Configuration
    "ConfigurationError",
    "MissingApiKeyError",
    # Collaborators
    "CollaboratorError",
    "TransportError",
    "ApiError",
    "InvalidResponseError",
    # Tool calls
    "ToolError",
    "InvalidArgumentsError",
    "UnknownToolError",
    # Commands
    "CommandError",
]
