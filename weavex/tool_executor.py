"""Execute model-issued tool calls against the web API and render the results.

Each tool renders its response into a compact text block with its own preview
limit (per search result content, or fetched page content). The coarser
per-turn ceiling is applied by the agent loop, not here.
"""

from __future__ import annotations

import logging
from typing import Callable, Protocol

from .constants import FETCH_PREVIEW_BYTES, SEARCH_PREVIEW_BYTES
from .exceptions import UnknownToolError
from .models import FetchResponse, SearchResponse, ToolCall
from .text_utils import truncate_utf8
from .tools import FetchArgs, SearchArgs, parse_tool_arguments

logger = logging.getLogger(__name__)


class WebProvider(Protocol):
    """The search/fetch operations the executor needs."""

    def search(self, query: str, max_results: int | None = None) -> SearchResponse: ...

    def fetch(self, url: str) -> FetchResponse: ...


def render_search_results(response: SearchResponse, preview_bytes: int = SEARCH_PREVIEW_BYTES) -> str:
    blocks = []
    for idx, result in enumerate(response.results, start=1):
        blocks.append(
            f"Result {idx}:\n"
            f"Title: {result.title}\n"
            f"URL: {result.url}\n"
            f"Content: {truncate_utf8(result.content, preview_bytes)}\n\n"
        )
    return "".join(blocks)


def render_fetch_result(response: FetchResponse, preview_bytes: int = FETCH_PREVIEW_BYTES) -> str:
    return (
        f"Title: {response.title}\n\n"
        f"Content:\n{truncate_utf8(response.content, preview_bytes)}\n\n"
        f"Links found: {len(response.links)}"
    )


def unknown_tool_message(name: str) -> str:
    return f"Error: Unknown tool '{name}'"


class ToolExecutor:
    """Dispatch tool calls by name to the web provider.

    Unknown tool names are answered with an error line so the model can recover;
    invalid arguments and provider failures are raised to the caller, which
    decides whether they end the run.
    """

    def __init__(self, web: WebProvider, *, announce: Callable[[str], None] | None = None) -> None:
        self.web = web
        self._announce = announce

    def execute(self, call: ToolCall) -> str:
        """Run one tool call and return its rendered text.

        Raises:
            InvalidArgumentsError: If the call's arguments do not validate
            CollaboratorError: If the web API call fails
        """
        try:
            args = parse_tool_arguments(call)
        except UnknownToolError:
            logger.warning("Unknown tool: %s", call.name)
            return unknown_tool_message(call.name)

        if isinstance(args, SearchArgs):
            return self._search(args)
        return self._fetch(args)

    def _search(self, args: SearchArgs) -> str:
        logger.info("Executing web_search: query='%s', max_results=%s", args.query, args.max_results)
        if self._announce is not None:
            self._announce(f"🔎 Searching: {args.query}...")
        response = self.web.search(args.query, args.max_results)
        return render_search_results(response)

    def _fetch(self, args: FetchArgs) -> str:
        logger.info("Executing web_fetch: url='%s'", args.url)
        if self._announce is not None:
            self._announce(f"🌐 Fetching: {args.url}...")
        response = self.web.fetch(args.url)
        return render_fetch_result(response)


__all__ = [
    "ToolExecutor",
    "WebProvider",
    "render_fetch_result",
    "render_search_results",
    "unknown_tool_message",
]
