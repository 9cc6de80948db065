"""Weavex - autonomous web research with a local LLM.

This package combines the Ollama web search/fetch API with a locally served
chat model: the agent lets the model call search and fetch tools in a loop
until it can answer, and the CLI also exposes plain search and fetch commands.
"""

from .agent import Agent, AgentResult
from .config import AgentConfig
from .conversation import Transcript, Turn
from .exceptions import (
    ApiError,
    CollaboratorError,
    ConfigurationError,
    InvalidArgumentsError,
    InvalidResponseError,
    MissingApiKeyError,
    ToolError,
    TransportError,
    UnknownToolError,
    WeavexError,
)
from .loading import LoadingIndicator
from .tool_executor import ToolExecutor
from .web_client import WebClient

__version__ = "0.1.0"

__all__ = [
    # Core classes
    "Agent",
    "AgentConfig",
    "AgentResult",
    "LoadingIndicator",
    "ToolExecutor",
    "Transcript",
    "Turn",
    "WebClient",
    # Exceptions
    "WeavexError",
    "ConfigurationError",
    "MissingApiKeyError",
    "CollaboratorError",
    "TransportError",
    "ApiError",
    "InvalidResponseError",
    "ToolError",
    "InvalidArgumentsError",
    "UnknownToolError",
]
