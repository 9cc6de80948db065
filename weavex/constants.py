"""Centralized constants for Weavex.

This module contains the byte budgets, defaults and identifiers shared by the
agent loop, the tool executor and the command-line surface.
"""

from __future__ import annotations

from enum import Enum


class ToolName(str, Enum):
    """Type-safe identifiers of the tools advertised to the model.

    Inherits from str to work as dict keys and in string comparisons.
    """

    WEB_SEARCH = "web_search"
    WEB_FETCH = "web_fetch"

    def __str__(self) -> str:
        """Return the string value."""
        return self.value


class Role(str, Enum):
    """Transcript turn roles understood by the chat endpoint."""

    USER = "user"
    ASSISTANT = "assistant"
    TOOL = "tool"

    def __str__(self) -> str:
        """Return the string value."""
        return self.value


# Tool output budgets (bytes of UTF-8)
SEARCH_PREVIEW_BYTES = 500  # Per-result content preview fed to the model
FETCH_PREVIEW_BYTES = 2000  # Fetched page content preview fed to the model
TOOL_RESULT_MAX_BYTES = 8000  # Ceiling applied to every tool turn
TRUNCATION_SUFFIX = "... [truncated]"

# CLI output budgets (bytes of UTF-8)
CLI_SEARCH_PREVIEW_BYTES = 200
CLI_FETCH_PREVIEW_BYTES = 1000
CLI_MAX_LINKS = 10

# Diagnostics
LOG_PREVIEW_CHARS = 100  # Characters of thinking/content echoed to the log

# Agent loop
DEFAULT_MAX_ITERATIONS = 50
DEFAULT_MODEL = "gpt-oss:20b"

# Endpoints
DEFAULT_API_BASE_URL = "https://ollama.com/api"
DEFAULT_OLLAMA_URL = "http://localhost:11434"

# Timeouts
DEFAULT_REQUEST_TIMEOUT = 30.0  # Web search/fetch request timeout (seconds)
DEFAULT_CHAT_TIMEOUT = 300.0  # Local chat completion timeout (seconds)
DEFAULT_INDICATOR_INTERVAL = 5.0  # Seconds between indicator ticks

# Web search API limits
MIN_SEARCH_RESULTS = 1
MAX_SEARCH_RESULTS = 10

# Browser preview
MAX_DATA_URL_SIZE = 2_000_000

__all__ = [
    # Enums
    "ToolName",
    "Role",
    # Numeric constants
    "SEARCH_PREVIEW_BYTES",
    "FETCH_PREVIEW_BYTES",
    "TOOL_RESULT_MAX_BYTES",
    "TRUNCATION_SUFFIX",
    "CLI_SEARCH_PREVIEW_BYTES",
    "CLI_FETCH_PREVIEW_BYTES",
    "CLI_MAX_LINKS",
    "LOG_PREVIEW_CHARS",
    "DEFAULT_MAX_ITERATIONS",
    "DEFAULT_MODEL",
    "DEFAULT_API_BASE_URL",
    "DEFAULT_OLLAMA_URL",
    "DEFAULT_REQUEST_TIMEOUT",
    "DEFAULT_CHAT_TIMEOUT",
    "DEFAULT_INDICATOR_INTERVAL",
    "MIN_SEARCH_RESULTS",
    "MAX_SEARCH_RESULTS",
    "MAX_DATA_URL_SIZE",
]
