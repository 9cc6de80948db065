"""Tool registry advertised to the model and validation of its tool calls.

The registry is a static list of function descriptors in the shape Ollama's
chat endpoint accepts. Tool calls coming back from the model carry loosely
typed arguments; `parse_tool_arguments` turns them into one typed variant per
known tool or raises InvalidArgumentsError / UnknownToolError.
"""

from __future__ import annotations

import json
from typing import Any, Dict, List, Union

from pydantic import BaseModel, ValidationError, field_validator

from .constants import ToolName
from .exceptions import InvalidArgumentsError, UnknownToolError
from .models import ToolCall


def create_web_search_tool() -> Dict[str, Any]:
    return {
        "type": "function",
        "function": {
            "name": ToolName.WEB_SEARCH.value,
            "description": (
                "Search the web for information. Returns a list of search results "
                "with titles, URLs, and content snippets."
            ),
            "parameters": {
                "type": "object",
                "properties": {
                    "query": {"type": "string", "description": "The search query to execute"},
                    "max_results": {
                        "type": "integer",
                        "description": "Maximum number of results to return (optional)",
                    },
                },
                "required": ["query"],
            },
        },
    }


def create_web_fetch_tool() -> Dict[str, Any]:
    return {
        "type": "function",
        "function": {
            "name": ToolName.WEB_FETCH.value,
            "description": "Fetch and parse content from a specific URL. Returns the page title, content, and links.",
            "parameters": {
                "type": "object",
                "properties": {"url": {"type": "string", "description": "The URL to fetch and parse"}},
                "required": ["url"],
            },
        },
    }


def build_tool_registry() -> List[Dict[str, Any]]:
    """Return the descriptors of every tool the agent can execute."""
    return [create_web_search_tool(), create_web_fetch_tool()]


class SearchArgs(BaseModel):
    query: str
    max_results: int | None = None

    @field_validator("query")
    @classmethod
    def _query_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("Query cannot be empty")
        return value

    @field_validator("max_results", mode="before")
    @classmethod
    def _ignore_unusable_limit(cls, value: Any) -> Any:
        # The limit is optional; a non-integer or non-positive value is dropped
        # instead of failing the whole call.
        if isinstance(value, bool) or not isinstance(value, int) or value < 1:
            return None
        return value


class FetchArgs(BaseModel):
    url: str

    @field_validator("url")
    @classmethod
    def _url_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("URL cannot be empty")
        return value


ToolArgs = Union[SearchArgs, FetchArgs]

_ARG_MODELS: Dict[str, type[BaseModel]] = {
    ToolName.WEB_SEARCH.value: SearchArgs,
    ToolName.WEB_FETCH.value: FetchArgs,
}


def _describe_validation_error(exc: ValidationError) -> str:
    first = exc.errors()[0]
    field = ".".join(str(part) for part in first.get("loc", ())) or "arguments"
    if first.get("type") == "missing":
        return f"Missing '{field}' field"
    msg = str(first.get("msg", exc))
    # pydantic prefixes messages raised from validators with "Value error, "
    return msg.removeprefix("Value error, ")


def parse_tool_arguments(call: ToolCall) -> ToolArgs:
    """Validate a tool call's arguments into the typed variant for its tool.

    Args:
        call: Tool call as issued by the model

    Returns:
        SearchArgs or FetchArgs

    Raises:
        UnknownToolError: If the tool name is not in the registry
        InvalidArgumentsError: If arguments are missing, blank or not a JSON object
    """
    model = _ARG_MODELS.get(call.name)
    if model is None:
        raise UnknownToolError(call.name, f"Unknown tool '{call.name}'")

    arguments = call.arguments
    if isinstance(arguments, str):
        try:
            arguments = json.loads(arguments) if arguments.strip() else {}
        except json.JSONDecodeError as exc:
            raise InvalidArgumentsError(call.name, f"Arguments for {call.name} are not valid JSON: {exc}") from exc
    if arguments is None:
        arguments = {}
    if not isinstance(arguments, dict):
        raise InvalidArgumentsError(call.name, f"Arguments for {call.name} must be an object")

    try:
        parsed = model.model_validate(arguments)
    except ValidationError as exc:
        raise InvalidArgumentsError(call.name, f"{_describe_validation_error(exc)} in {call.name}") from exc
    return parsed  # type: ignore[return-value]


__all__ = [
    "FetchArgs",
    "SearchArgs",
    "ToolArgs",
    "build_tool_registry",
    "create_web_fetch_tool",
    "create_web_search_tool",
    "parse_tool_arguments",
]
