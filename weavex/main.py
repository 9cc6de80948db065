from __future__ import annotations

import argparse
import logging
import sys
from typing import Sequence, TextIO

from dotenv import load_dotenv

from .agent import Agent
from .cli import config_from_args, configure_logging, parse_args
from .config import AgentConfig
from .exceptions import CommandError, WeavexError
from .formatter import format_fetch_response, format_search_results, search_results_markdown
from .markdown_preview import open_markdown_in_browser
from .web_client import WebClient

logger = logging.getLogger(__name__)


def _run_search(client: WebClient, args: argparse.Namespace, cfg: AgentConfig, out: TextIO) -> None:
    logger.info("Searching for: %s", args.query)
    try:
        response = client.search(args.query)
    except WeavexError as exc:
        raise CommandError(f"Search request failed: {exc}") from exc

    if cfg.preview:
        open_markdown_in_browser(search_results_markdown(response))
        print("🔍 Opened results in browser", file=out)
    else:
        print(format_search_results(response, cfg.json_output), file=out)


def _run_fetch(client: WebClient, args: argparse.Namespace, cfg: AgentConfig, out: TextIO) -> None:
    logger.info("Fetching URL: %s", args.url)
    try:
        response = client.fetch(args.url)
    except WeavexError as exc:
        raise CommandError(f"Failed to fetch URL: {exc}") from exc

    if cfg.preview:
        open_markdown_in_browser(response.content)
        print("🌐 Opened result in browser", file=out)
    else:
        print(format_fetch_response(response, cfg.json_output), file=out)


def _run_agent(client: WebClient, args: argparse.Namespace, cfg: AgentConfig, out: TextIO) -> None:
    logger.info("Starting agent with model: %s", cfg.model)
    print(f"🤖 Initializing agent with model: {cfg.model}\n", file=out)
    agent = Agent(cfg, web_client=client, output_stream=out)

    print(f"🔍 Researching: {args.query}\n", file=out)
    try:
        result = agent.run(args.query)
    except WeavexError as exc:
        raise CommandError(f"Agent execution failed: {exc}") from exc

    if cfg.preview:
        open_markdown_in_browser(result)
        print("\n📝 Opened result in browser", file=out)
    else:
        print(f"\n📝 Final Answer:\n{result}", file=out)


_HANDLERS = {
    "search": _run_search,
    "fetch": _run_fetch,
    "agent": _run_agent,
}


def main(argv: Sequence[str] | None = None, *, out: TextIO | None = None) -> int:
    """Command-line entry point; returns the process exit status."""
    out = out or sys.stdout
    # Environment defaults are read while the parser is built
    found_env_file = load_dotenv()
    args = parse_args(argv)
    configure_logging("DEBUG" if args.verbose else "WARNING", args.log_file, args.log_console)
    if not found_env_file:
        logger.debug("No .env file found")

    try:
        cfg = config_from_args(args)
        with WebClient.from_config(cfg) as client:
            _HANDLERS[args.command](client, args, cfg, out)
    except WeavexError as exc:
        logger.debug("Command %s failed", args.command, exc_info=True)
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
