from __future__ import annotations

import pytest

from tests.agent_test_utils import FakeWebClient, fetch_call, search_call
from weavex.exceptions import ApiError, InvalidArgumentsError, TransportError
from weavex.models import FetchResponse, SearchResponse, SearchResult, ToolCall
from weavex.tool_executor import ToolExecutor, render_fetch_result, render_search_results


def test_render_search_results_format() -> None:
    response = SearchResponse(
        results=[
            SearchResult(title="First", url="https://a.example", content="alpha"),
            SearchResult(title="Second", url="https://b.example", content="beta"),
        ]
    )
    assert render_search_results(response) == (
        "Result 1:\nTitle: First\nURL: https://a.example\nContent: alpha\n\n"
        "Result 2:\nTitle: Second\nURL: https://b.example\nContent: beta\n\n"
    )


def test_render_search_results_truncates_content_per_result() -> None:
    response = SearchResponse(results=[SearchResult(title="T", url="u", content="c" * 900)])
    rendered = render_search_results(response)
    assert "Content: " + "c" * 500 + "\n\n" in rendered
    assert "c" * 501 not in rendered


def test_render_search_results_empty() -> None:
    assert render_search_results(SearchResponse(results=[])) == ""


def test_render_fetch_result_format() -> None:
    page = FetchResponse(title="Docs", content="body text", links=["a", "b", "c"])
    assert render_fetch_result(page) == "Title: Docs\n\nContent:\nbody text\n\nLinks found: 3"


def test_render_fetch_result_truncates_content() -> None:
    page = FetchResponse(title="Docs", content="é" * 1500)
    rendered = render_fetch_result(page)
    assert "Content:\n" + "é" * 1000 + "\n\nLinks found: 0" in rendered


class TestToolExecutor:
    """Dispatching tool calls to the web provider."""

    def test_search_dispatch_passes_limit(self) -> None:
        web = FakeWebClient()
        out = ToolExecutor(web).execute(search_call("rust", max_results=4))
        assert web.searches == [("rust", 4)]
        assert out.startswith("Result 1:\nTitle: T\n")

    def test_fetch_dispatch(self) -> None:
        web = FakeWebClient()
        out = ToolExecutor(web).execute(fetch_call("https://example.com/page"))
        assert web.fetches == ["https://example.com/page"]
        assert out.endswith("Links found: 2")

    def test_unknown_tool_reported_as_text(self) -> None:
        web = FakeWebClient()
        out = ToolExecutor(web).execute(ToolCall(name="calculator", arguments={}))
        assert out == "Error: Unknown tool 'calculator'"
        assert web.searches == [] and web.fetches == []

    def test_invalid_arguments_raise(self) -> None:
        web = FakeWebClient()
        with pytest.raises(InvalidArgumentsError):
            ToolExecutor(web).execute(ToolCall(name="web_search", arguments={}))
        assert web.searches == []

    @pytest.mark.parametrize("error", [TransportError("down"), ApiError(500, "boom")])
    def test_provider_errors_propagate(self, error) -> None:
        web = FakeWebClient(error=error)
        with pytest.raises(type(error)):
            ToolExecutor(web).execute(search_call())

    def test_announce_callback(self) -> None:
        seen: list[str] = []
        executor = ToolExecutor(FakeWebClient(), announce=seen.append)
        executor.execute(search_call("weaving"))
        executor.execute(fetch_call("https://x.example"))
        assert seen == ["🔎 Searching: weaving...", "🌐 Fetching: https://x.example..."]
