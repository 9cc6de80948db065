from __future__ import annotations

from types import SimpleNamespace

import httpx
import pytest
from ollama import ResponseError

from weavex.chat_client import ChatClient, parse_chat_response
from weavex.exceptions import ApiError, InvalidResponseError, TransportError


class DummyOllama:
    """Records chat kwargs and returns (or raises) a canned response."""

    def __init__(self, response=None, error: Exception | None = None) -> None:
        self.response = response
        self.error = error
        self.kwargs: dict = {}

    def chat(self, **kwargs):
        self.kwargs = kwargs
        if self.error is not None:
            raise self.error
        return self.response


class TestParseChatResponse:
    def test_plain_answer(self) -> None:
        reply = parse_chat_response({"message": {"role": "assistant", "content": "hello"}})
        assert reply.content == "hello"
        assert reply.tool_calls is None
        assert reply.thinking is None

    def test_tool_calls_and_thinking(self) -> None:
        response = {
            "message": {
                "content": "",
                "thinking": "I should search",
                "tool_calls": [
                    {"function": {"name": "web_search", "arguments": {"query": "rust"}}},
                    {"function": {"name": "web_fetch", "arguments": {"url": "https://x"}}},
                ],
            }
        }
        reply = parse_chat_response(response)
        assert reply.thinking == "I should search"
        assert [c.name for c in reply.tool_calls] == ["web_search", "web_fetch"]
        assert reply.tool_calls[0].arguments == {"query": "rust"}

    def test_attribute_style_response(self) -> None:
        function = SimpleNamespace(name="web_fetch", arguments={"url": "https://x"})
        message = SimpleNamespace(content=None, thinking=None, tool_calls=[SimpleNamespace(function=function)])
        reply = parse_chat_response(SimpleNamespace(message=message))
        assert reply.content == ""
        assert reply.tool_calls[0].name == "web_fetch"

    def test_missing_arguments_default_to_empty(self) -> None:
        reply = parse_chat_response({"message": {"tool_calls": [{"function": {"name": "web_search"}}]}})
        assert reply.tool_calls[0].arguments == {}

    def test_empty_tool_calls_list(self) -> None:
        reply = parse_chat_response({"message": {"content": "done", "tool_calls": []}})
        assert reply.tool_calls is None

    def test_missing_message(self) -> None:
        with pytest.raises(InvalidResponseError, match="missing 'message'"):
            parse_chat_response({"done": True})

    def test_tool_call_without_name(self) -> None:
        with pytest.raises(InvalidResponseError):
            parse_chat_response({"message": {"tool_calls": [{"function": {"arguments": {}}}]}})


class TestChatClient:
    def test_request_shape_with_reasoning(self) -> None:
        dummy = DummyOllama({"message": {"content": "ok"}})
        client = ChatClient(client=dummy)
        messages = [{"role": "user", "content": "q"}]
        tools = [{"type": "function", "function": {"name": "web_search"}}]
        reply = client.chat("gpt-oss:20b", messages, tools, think=True)
        assert reply.content == "ok"
        assert dummy.kwargs == {
            "model": "gpt-oss:20b",
            "messages": messages,
            "tools": tools,
            "stream": False,
            "think": True,
        }

    def test_reasoning_omitted_when_disabled(self) -> None:
        dummy = DummyOllama({"message": {"content": "ok"}})
        ChatClient(client=dummy).chat("m", [{"role": "user", "content": "q"}])
        assert dummy.kwargs["think"] is None
        assert dummy.kwargs["tools"] is None

    def test_response_error_maps_to_api_error(self) -> None:
        dummy = DummyOllama(error=ResponseError("model 'nope' not found", 404))
        with pytest.raises(ApiError) as exc_info:
            ChatClient(client=dummy).chat("nope", [])
        assert exc_info.value.status == 404
        assert "model 'nope' not found" in str(exc_info.value)

    @pytest.mark.parametrize(
        "error",
        [ConnectionError("Failed to connect to Ollama"), httpx.ReadTimeout("timed out")],
    )
    def test_transport_failures(self, error) -> None:
        with pytest.raises(TransportError, match="HTTP request failed"):
            ChatClient(client=DummyOllama(error=error)).chat("m", [])


def test_installed_ollama_accepts_think() -> None:
    import inspect

    import ollama

    assert "think" in inspect.signature(ollama.Client.chat).parameters
