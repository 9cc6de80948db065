"""Wrapper around the local Ollama chat endpoint with tool support."""

from __future__ import annotations

import logging
from typing import Any, List, Mapping, Sequence

import httpx
from ollama import Client, ResponseError

from .constants import DEFAULT_CHAT_TIMEOUT, DEFAULT_OLLAMA_URL
from .exceptions import ApiError, InvalidResponseError, TransportError
from .models import ChatReply, ToolCall

logger = logging.getLogger(__name__)


def _field(obj: Any, name: str) -> Any:
    # ollama responses are subscriptable models; tests and older clients use dicts
    if isinstance(obj, Mapping):
        return obj.get(name)
    return getattr(obj, name, None)


def parse_chat_response(response: Any) -> ChatReply:
    """Convert an ollama ChatResponse (or an equivalent dict) into a ChatReply.

    Raises:
        InvalidResponseError: If the response carries no assistant message
    """
    message = _field(response, "message")
    if message is None:
        raise InvalidResponseError("Failed to parse chat response: missing 'message'")

    tool_calls: List[ToolCall] | None = None
    raw_calls = _field(message, "tool_calls")
    if raw_calls:
        tool_calls = []
        for raw in raw_calls:
            function = _field(raw, "function")
            name = _field(function, "name") if function is not None else None
            if not name:
                raise InvalidResponseError("Failed to parse chat response: tool call without a function name")
            arguments = _field(function, "arguments")
            if isinstance(arguments, Mapping):
                arguments = dict(arguments)
            tool_calls.append(ToolCall(name=name, arguments=arguments if arguments is not None else {}))

    return ChatReply(
        content=_field(message, "content") or "",
        tool_calls=tool_calls,
        thinking=_field(message, "thinking"),
    )


class ChatClient:
    """Send non-streaming chat requests to a local Ollama server.

    Errors are translated so callers only see the project's exceptions:
    unreachable server or timeout -> TransportError, error status -> ApiError.
    """

    def __init__(
        self,
        host: str = DEFAULT_OLLAMA_URL,
        *,
        timeout: float = DEFAULT_CHAT_TIMEOUT,
        client: Any | None = None,
    ) -> None:
        self.host = host
        self._client = client if client is not None else Client(host=host, timeout=timeout)

    def chat(
        self,
        model: str,
        messages: Sequence[Mapping[str, Any]],
        tools: Sequence[Mapping[str, Any]] | None = None,
        think: bool = False,
    ) -> ChatReply:
        """Run one chat round.

        Args:
            model: Local model name
            messages: Full transcript in chat-message form
            tools: Tool descriptors advertised to the model
            think: Request reasoning output; omitted from the request when False

        Returns:
            The assistant message of this round
        """
        logger.debug("Sending chat request to local Ollama at: %s/api/chat", self.host)
        try:
            response = self._client.chat(
                model=model,
                messages=list(messages),
                tools=list(tools) if tools else None,
                stream=False,
                think=True if think else None,
            )
        except ResponseError as exc:
            raise ApiError(exc.status_code, exc.error) from exc
        except (ConnectionError, httpx.HTTPError) as exc:
            raise TransportError(f"HTTP request failed: {exc}") from exc
        return parse_chat_response(response)


__all__ = ["ChatClient", "parse_chat_response"]
