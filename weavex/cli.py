from __future__ import annotations

import argparse
import logging
import sys
from dataclasses import dataclass
from typing import Any, Sequence

from .config import AgentConfig

COMMANDS = ("search", "fetch", "agent")
DEFAULT_COMMAND = "search"

_DESCRIPTION = "Weave together web search and AI reasoning for autonomous research"

_EPILOG = """examples:
  # Basic search
  weavex "what is rust programming"

  # Limit results
  weavex --max-results 5 "best practices for async rust"

  # JSON output
  weavex --json "machine learning trends 2025"

  # Fetch a URL
  weavex fetch https://example.com

  # AI agent (default shows only final answer with loading animation)
  weavex agent "what are the latest rust async runtime benchmarks"

  # Use different model
  weavex agent --model qwen3:14b "research topic"

  # Show thinking steps and reasoning process
  weavex agent --show-thinking "query"

Requires an API key from https://ollama.com, set via OLLAMA_API_KEY or --api-key.
"""


@dataclass
class ArgSpec:
    """Specification for a command-line argument."""

    name: str
    short: str | None = None
    arg_type: type | None = None
    default_attr: str | None = None
    dest: str | None = None
    action: Any = None  # Can be str or argparse.BooleanOptionalAction
    choices: list[str] | None = None
    metavar: str | None = None
    help_text: str = ""


# Options accepted before the subcommand
_GLOBAL_SPECS: list[ArgSpec] = [
    ArgSpec(
        "--api-key",
        "-k",
        metavar="KEY",
        help_text="Ollama API key (can also use OLLAMA_API_KEY env var)",
    ),
    ArgSpec(
        "--max-results",
        "-m",
        arg_type=int,
        default_attr="max_results",
        metavar="NUM",
        help_text="Maximum number of search results to return",
    ),
    ArgSpec("--json", "-j", action="store_true", dest="json_output", help_text="Output results as JSON"),
    ArgSpec(
        "--preview",
        action="store_true",
        default_attr="preview",
        help_text="Open the result in the browser as rendered markdown",
    ),
    ArgSpec("--verbose", "-v", action="store_true", help_text="Enable verbose logging"),
    ArgSpec(
        "--timeout",
        arg_type=float,
        metavar="SECONDS",
        help_text="Request timeout in seconds (default: 30, or OLLAMA_TIMEOUT)",
    ),
    ArgSpec("--log-file", default_attr="log_file", help_text="Optional log file path"),
    ArgSpec(
        "--log-console",
        action=argparse.BooleanOptionalAction,
        default_attr="log_console",
        help_text="Enable console logging (pass --no-log-console to silence log statements on stderr)",
    ),
]

# Options of the `agent` subcommand
_AGENT_SPECS: list[ArgSpec] = [
    ArgSpec("--model", "-m", metavar="MODEL", help_text="Local Ollama model to use (default: gpt-oss:20b)"),
    ArgSpec("--ollama-url", default_attr="ollama_url", metavar="URL", help_text="Local Ollama server URL"),
    ArgSpec(
        "--max-iterations",
        arg_type=int,
        default_attr="max_iterations",
        metavar="NUM",
        help_text="Maximum agent iterations",
    ),
    ArgSpec(
        "--show-thinking",
        action="store_true",
        default_attr="show_thinking",
        help_text="Show the model's reasoning, tool calls and responses instead of the loading animation",
    ),
    ArgSpec(
        "--disable-reasoning",
        action="store_true",
        default_attr="disable_reasoning",
        help_text="Disable model reasoning (thinking mode) for faster responses",
    ),
    ArgSpec(
        "--on-invalid-arguments",
        default_attr="invalid_arguments_policy",
        dest="invalid_arguments_policy",
        choices=["abort", "report"],
        help_text="Abort the run, or report malformed tool arguments back to the model",
    ),
    ArgSpec(
        "--on-tool-error",
        default_attr="tool_error_policy",
        dest="tool_error_policy",
        choices=["abort", "report"],
        help_text="Abort the run, or report failed search/fetch calls back to the model",
    ),
    # Separate dest: subparser defaults would otherwise overwrite the global --preview
    ArgSpec(
        "--preview",
        action="store_true",
        dest="agent_preview",
        help_text="Open the final answer in the browser as rendered markdown",
    ),
]

# Global options that consume the following token as their value
_VALUE_OPTIONS = {
    name
    for spec in _GLOBAL_SPECS
    if spec.action is None
    for name in (spec.name, spec.short)
    if name is not None
}


def _add_argument_from_spec(parser: argparse.ArgumentParser, spec: ArgSpec, defaults: AgentConfig) -> None:
    """Add a single argument to the parser from its specification.

    Args:
        parser: ArgumentParser to add to
        spec: Argument specification
        defaults: Default config to extract default value from
    """
    names = [spec.name]
    if spec.short:
        names.append(spec.short)

    kwargs: dict[str, Any] = {"help": spec.help_text}

    if spec.default_attr:
        kwargs["default"] = getattr(defaults, spec.default_attr)

    if spec.dest:
        kwargs["dest"] = spec.dest

    if spec.arg_type:
        kwargs["type"] = spec.arg_type

    if spec.action:
        kwargs["action"] = spec.action

    if spec.choices:
        kwargs["choices"] = spec.choices

    if spec.metavar:
        kwargs["metavar"] = spec.metavar

    parser.add_argument(*names, **kwargs)


def build_arg_parser() -> argparse.ArgumentParser:
    """Build argument parser using data-driven specification.

    Returns:
        Configured ArgumentParser instance
    """
    parser = argparse.ArgumentParser(
        prog="weavex",
        description=_DESCRIPTION,
        epilog=_EPILOG,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    defaults = AgentConfig()

    for spec in _GLOBAL_SPECS:
        _add_argument_from_spec(parser, spec, defaults)

    subparsers = parser.add_subparsers(dest="command", metavar="{search,fetch,agent}")

    search_parser = subparsers.add_parser("search", help="Search the web (default when no command is given)")
    search_parser.add_argument("query", metavar="QUERY", help="Search query")

    fetch_parser = subparsers.add_parser("fetch", help="Fetch and parse a specific URL")
    fetch_parser.add_argument("url", metavar="URL", help="URL to fetch")

    agent_parser = subparsers.add_parser("agent", help="Run an AI agent with web search capabilities")
    agent_parser.add_argument("query", metavar="QUERY", help="Question or task for the agent")
    for spec in _AGENT_SPECS:
        _add_argument_from_spec(agent_parser, spec, defaults)

    return parser


def normalize_argv(argv: Sequence[str]) -> list[str]:
    """Insert the default `search` command before a bare query.

    `weavex "some query"` is shorthand for `weavex search "some query"`; global
    options before the query are left in place.
    """
    args = list(argv)
    idx = 0
    while idx < len(args):
        token = args[idx]
        if token == "--":
            return args[:idx] + [DEFAULT_COMMAND] + args[idx + 1 :]
        if token.startswith("-") and token != "-":
            if token in _VALUE_OPTIONS:
                idx += 1
            idx += 1
            continue
        if token in COMMANDS:
            return args
        return args[:idx] + [DEFAULT_COMMAND] + args[idx:]
    return args


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = build_arg_parser()
    args = parser.parse_args(normalize_argv(sys.argv[1:] if argv is None else argv))
    if args.command is None:
        parser.error("Query required. Use 'weavex <query>' or 'weavex --help' for usage information")
    return args


def config_from_args(args: argparse.Namespace) -> AgentConfig:
    """Build an AgentConfig from parsed arguments, keeping env defaults for unset options."""
    values: dict[str, Any] = {
        "max_results": args.max_results,
        "json_output": args.json_output,
        "preview": args.preview or getattr(args, "agent_preview", False),
        "log_level": "DEBUG" if args.verbose else "WARNING",
        "log_file": args.log_file,
        "log_console": args.log_console,
    }
    if args.api_key:
        values["api_key"] = args.api_key
    if args.timeout is not None:
        values["timeout"] = args.timeout
    if args.command == "agent":
        if args.model:
            values["model"] = args.model
        values.update(
            ollama_url=args.ollama_url,
            max_iterations=args.max_iterations,
            show_thinking=args.show_thinking,
            disable_reasoning=args.disable_reasoning,
            invalid_arguments_policy=args.invalid_arguments_policy,
            tool_error_policy=args.tool_error_policy,
        )
    return AgentConfig(**values)


def configure_logging(level: str, log_file: str | None, log_console: bool = True, *, force: bool = True) -> None:
    level_upper = (level or "WARNING").upper()
    numeric = getattr(logging, level_upper, logging.WARNING)
    handlers: list[logging.Handler] = []
    if log_console:
        handlers.append(logging.StreamHandler(sys.stderr))
    if log_file:
        handlers.append(logging.FileHandler(log_file))
    if not handlers:
        # Respect --no-log-console even without a log file by discarding logs via NullHandler
        handlers.append(logging.NullHandler())
    logging.basicConfig(
        level=numeric,
        format="%(levelname)s %(name)s: %(message)s",
        handlers=handlers,
        force=force,
    )
