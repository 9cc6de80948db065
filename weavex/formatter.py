"""Terminal and markdown rendering of direct search/fetch results."""

from __future__ import annotations

from .constants import CLI_FETCH_PREVIEW_BYTES, CLI_MAX_LINKS, CLI_SEARCH_PREVIEW_BYTES
from .models import FetchResponse, SearchResponse
from .text_utils import truncate_utf8, utf8_len


def format_search_results(response: SearchResponse, as_json: bool = False) -> str:
    if as_json:
        return response.model_dump_json(indent=2)

    if not response.results:
        return "No results found.\n"

    lines = [f"Found {len(response.results)} results:\n\n"]
    for idx, result in enumerate(response.results, start=1):
        content = result.content
        if utf8_len(content) > CLI_SEARCH_PREVIEW_BYTES:
            content = f"{truncate_utf8(content, CLI_SEARCH_PREVIEW_BYTES)}..."
        lines.append(f"{idx}. {result.title}\n")
        lines.append(f"   {result.url}\n")
        lines.append(f"   {content}\n\n")
    return "".join(lines)


def format_fetch_response(response: FetchResponse, as_json: bool = False) -> str:
    if as_json:
        return response.model_dump_json(indent=2)

    content = response.content
    if utf8_len(content) > CLI_FETCH_PREVIEW_BYTES:
        content = (
            f"{truncate_utf8(content, CLI_FETCH_PREVIEW_BYTES)}...\n\n"
            "[Content truncated. Use --json for full content]"
        )

    lines = [f"Title: {response.title}\n\n", f"Content:\n{content}\n\n"]
    if response.links:
        lines.append(f"Found {len(response.links)} links:\n")
        for idx, link in enumerate(response.links[:CLI_MAX_LINKS], start=1):
            lines.append(f"  {idx}. {link}\n")
        if len(response.links) > CLI_MAX_LINKS:
            lines.append(f"  ... and {len(response.links) - CLI_MAX_LINKS} more\n")
    return "".join(lines)


def search_results_markdown(response: SearchResponse) -> str:
    """Render search results as a markdown document for the browser preview."""
    parts = [f"# Search Results\n\nFound {len(response.results)} results:\n\n"]
    for idx, result in enumerate(response.results, start=1):
        parts.append(f"## {idx}. {result.title}\n\n")
        parts.append(f"**URL:** [{result.url}]({result.url})\n\n")
        parts.append(f"{result.content}\n\n")
    return "".join(parts)


__all__ = ["format_fetch_response", "format_search_results", "search_results_markdown"]
