"""Pydantic models for web API payloads and chat replies."""

from __future__ import annotations

from typing import Any, List

from pydantic import BaseModel, Field, field_validator

from .text_utils import clean_text


class SearchResult(BaseModel):
    title: str
    url: str
    content: str

    @field_validator("title", "url", "content")
    @classmethod
    def _clean(cls, value: str) -> str:
        return clean_text(value)


class SearchResponse(BaseModel):
    results: List[SearchResult]


class FetchResponse(BaseModel):
    """Parsed page returned by the web fetch API; missing fields default to empty."""

    title: str = ""
    content: str = ""
    links: List[str] = Field(default_factory=list)

    @field_validator("title", "content")
    @classmethod
    def _clean(cls, value: str) -> str:
        return clean_text(value)

    @field_validator("links")
    @classmethod
    def _clean_links(cls, value: List[str]) -> List[str]:
        return [clean_text(link) for link in value]


class ToolCall(BaseModel):
    """A model-issued request to invoke a tool.

    `arguments` is whatever the model produced: normally a mapping, sometimes a
    JSON-encoded string. It is validated by `tools.parse_tool_arguments`.
    """

    name: str
    arguments: Any = Field(default_factory=dict)

    def to_message(self) -> dict[str, Any]:
        """Serialize in the shape the chat endpoint expects inside an assistant message."""
        return {"function": {"name": self.name, "arguments": self.arguments}}


class ChatReply(BaseModel):
    """The assistant message of one non-streaming chat round."""

    content: str = ""
    tool_calls: List[ToolCall] | None = None
    thinking: str | None = None


__all__ = [
    "ChatReply",
    "FetchResponse",
    "SearchResponse",
    "SearchResult",
    "ToolCall",
]
