"""Configuration using Pydantic for validation and readable error messages."""

from __future__ import annotations

import os
from typing import Any, Literal

from pydantic import BaseModel, Field, ValidationError

from .constants import (
    DEFAULT_API_BASE_URL,
    DEFAULT_CHAT_TIMEOUT,
    DEFAULT_INDICATOR_INTERVAL,
    DEFAULT_MAX_ITERATIONS,
    DEFAULT_MODEL,
    DEFAULT_OLLAMA_URL,
    DEFAULT_REQUEST_TIMEOUT,
    MAX_SEARCH_RESULTS,
    MIN_SEARCH_RESULTS,
)
from .exceptions import ConfigurationError, MissingApiKeyError

ToolFailurePolicy = Literal["abort", "report"]


def _env_timeout() -> float:
    raw = os.getenv("OLLAMA_TIMEOUT")
    if raw is None:
        return DEFAULT_REQUEST_TIMEOUT
    try:
        return float(int(raw))
    except ValueError:
        # Unparsable values fall back to the default
        return DEFAULT_REQUEST_TIMEOUT


class AgentConfig(BaseModel):
    """Configuration for the web client, the local chat model and the agent loop.

    Uses Pydantic for validation with clear error messages. Every field has a
    default and can be overridden via CLI arguments or environment variables.
    """

    # Web search/fetch API
    api_key: str | None = Field(
        default_factory=lambda: os.getenv("OLLAMA_API_KEY") or None,
        description="API key for the web search/fetch API",
    )
    base_url: str = Field(
        default_factory=lambda: os.getenv("OLLAMA_BASE_URL", DEFAULT_API_BASE_URL),
        description="Base URL of the web search/fetch API",
    )
    timeout: float = Field(default_factory=_env_timeout, gt=0, description="Request timeout in seconds")
    max_results: int | None = Field(
        default=None,
        ge=MIN_SEARCH_RESULTS,
        le=MAX_SEARCH_RESULTS,
        description="Maximum number of search results to return",
    )

    # Local chat model
    model: str = Field(
        default_factory=lambda: os.getenv("WEAVEX_MODEL", DEFAULT_MODEL),
        description="Local Ollama model used by the agent",
    )
    ollama_url: str = Field(default=DEFAULT_OLLAMA_URL, description="Local Ollama server URL")
    chat_timeout: float = Field(default=DEFAULT_CHAT_TIMEOUT, gt=0, description="Chat request timeout in seconds")

    # Agent loop
    max_iterations: int = Field(default=DEFAULT_MAX_ITERATIONS, ge=1, description="Maximum agent iterations")
    show_thinking: bool = False
    disable_reasoning: bool = False
    invalid_arguments_policy: ToolFailurePolicy = Field(
        default="abort", description="Abort the run or report malformed tool arguments back to the model"
    )
    tool_error_policy: ToolFailurePolicy = Field(
        default="abort", description="Abort the run or report failed search/fetch calls back to the model"
    )
    indicator_interval: float = Field(
        default=DEFAULT_INDICATOR_INTERVAL, gt=0, description="Seconds between loading indicator ticks"
    )

    # Output
    json_output: bool = False
    preview: bool = False

    # Logging configuration
    log_level: str = Field(default="WARNING", description="Logging level")
    log_file: str | None = Field(default=None, description="Log file path")
    log_console: bool = Field(default=True, description="Enable console logging")

    model_config = {
        "validate_assignment": True,
        "extra": "forbid",  # Raise error on unknown fields
        "protected_namespaces": (),  # allow the `model` field name
    }

    def _format_validation_error(self, e: ValidationError, data: dict) -> str:
        """Format Pydantic ValidationError into a user-friendly message.

        Args:
            e: Pydantic ValidationError
            data: Input data dict

        Returns:
            Formatted error message string
        """
        errors = e.errors()
        if not errors:
            return f"Configuration validation failed: {e}"

        first_error = errors[0]
        field_name = str(first_error["loc"][0]) if first_error["loc"] else "unknown"
        error_type = first_error["type"]
        value = data.get(field_name)
        ctx = first_error.get("ctx", {})

        field_info = type(self).model_fields.get(field_name)
        min_val = None
        max_val = None
        if field_info is not None:
            for constraint in field_info.metadata:
                if getattr(constraint, "ge", None) is not None:
                    min_val = constraint.ge
                if getattr(constraint, "le", None) is not None:
                    max_val = constraint.le

        if min_val is not None and max_val is not None:
            return f"{field_name} must be in [{min_val}, {max_val}], got {value}"

        if "greater_than_equal" in error_type:
            return f"{field_name} must be >= {ctx.get('ge')}, got {value}"
        elif "less_than_equal" in error_type:
            return f"{field_name} must be <= {ctx.get('le')}, got {value}"
        elif "greater_than" in error_type:
            return f"{field_name} must be > {ctx.get('gt')}, got {value}"
        elif "literal_error" in error_type:
            return f"{field_name} must be {ctx.get('expected')}, got {value}"
        elif "extra_forbidden" in error_type:
            return f"Unknown configuration option: {field_name}"
        else:
            msg = first_error.get("msg", str(e))
            return f"Invalid configuration: {msg}"

    def __init__(self, **data: Any) -> None:
        """Initialize config with validation error conversion."""
        try:
            super().__init__(**data)
        except ValidationError as e:
            msg = self._format_validation_error(e, data)
            raise ConfigurationError(msg) from e

    @property
    def enable_reasoning(self) -> bool:
        """Whether the chat model is asked to emit its thinking."""
        return not self.disable_reasoning

    def require_api_key(self) -> str:
        """Return the API key or raise MissingApiKeyError."""
        if not self.api_key:
            raise MissingApiKeyError()
        return self.api_key


__all__ = ["AgentConfig", "ToolFailurePolicy"]
