"""The research agent loop.

Each round sends the whole transcript and the tool registry to the local chat
model. A reply without tool calls ends the run with its content; otherwise
every tool call is executed in the order the model issued it, and each result
is capped and appended as a tool turn before the next round. When the
iteration budget runs out the agent returns a fixed message describing what it
was doing instead of raising.
"""

from __future__ import annotations

import logging
import sys
from dataclasses import dataclass
from typing import Any, Callable, Dict, Protocol, Sequence, TextIO, TYPE_CHECKING

from .chat_client import ChatClient
from .constants import LOG_PREVIEW_CHARS
from .conversation import Transcript
from .exceptions import CollaboratorError, InvalidArgumentsError
from .loading import LoadingIndicator
from .models import ChatReply, ToolCall
from .text_utils import cap_tool_result, indent_block, preview, utf8_len
from .tool_executor import ToolExecutor, WebProvider
from .tools import build_tool_registry

if TYPE_CHECKING:
    from .config import AgentConfig

logger = logging.getLogger(__name__)


class ChatProvider(Protocol):
    def chat(
        self,
        model: str,
        messages: Sequence[Dict[str, Any]],
        tools: Sequence[Dict[str, Any]] | None = None,
        think: bool = False,
    ) -> ChatReply: ...


@dataclass
class ToolResult:
    """Output of one tool call: the rendered text and its capped form."""

    source_tool_name: str
    raw_text: str
    truncated_text: str


@dataclass
class LoopState:
    iteration: int
    max_iterations: int
    transcript: Transcript
    terminal_result: "AgentResult | None" = None


@dataclass
class AgentResult:
    """Outcome of a run.

    `exhausted` is True when the iteration budget ran out; `answer` then holds
    the exhaustion message instead of a model answer.
    """

    answer: str
    exhausted: bool
    iterations: int


def exhaustion_message(max_iterations: int, last_action: str) -> str:
    return (
        f"Reached maximum iterations ({max_iterations}) while {last_action}. "
        "Try a more specific query or use --max-iterations to increase the limit."
    )


class Agent:
    """Drive the chat model and its web tools until it produces an answer.

    In verbose mode (`show_thinking`) reasoning, responses and tool calls are
    printed as they happen; otherwise a loading indicator runs while the agent
    waits. The two modes never overlap.
    """

    def __init__(
        self,
        cfg: "AgentConfig",
        *,
        chat_client: ChatProvider | None = None,
        web_client: WebProvider | None = None,
        output_stream: TextIO | None = None,
        indicator_factory: Callable[[], LoadingIndicator] | None = None,
    ) -> None:
        self.cfg = cfg
        self._out: TextIO = output_stream or sys.stdout
        if chat_client is None:
            chat_client = ChatClient(cfg.ollama_url, timeout=cfg.chat_timeout)
        if web_client is None:
            from .web_client import WebClient

            web_client = WebClient.from_config(cfg)
        self.chat_client = chat_client
        self.web_client = web_client
        self.tools = build_tool_registry()
        self.executor = ToolExecutor(web_client, announce=self._announce_tool if cfg.show_thinking else None)
        self._indicator_factory = indicator_factory or self._default_indicator

    def _default_indicator(self) -> LoadingIndicator:
        return LoadingIndicator.start(interval=self.cfg.indicator_interval, stream=self._out)

    def _write(self, text: str) -> None:
        try:
            self._out.write(text)
            if hasattr(self._out, "flush"):
                self._out.flush()
        except OSError as exc:
            logger.error("Output stream write failed: %s", exc)

    def _writeln(self, text: str = "") -> None:
        self._write(f"{text}\n")

    def _announce_tool(self, text: str) -> None:
        self._writeln(f"   {text}")

    def run(self, user_query: str) -> str:
        """Answer a query; returns the model's answer or the exhaustion message."""
        return self.run_detailed(user_query).answer

    def run_detailed(self, user_query: str) -> AgentResult:
        """Answer a query and report whether the iteration budget ran out.

        Raises:
            CollaboratorError: If the chat model (or, under the default policy,
                a web tool) fails
            InvalidArgumentsError: If the model issues malformed tool arguments
                under the default policy
        """
        state = LoopState(iteration=0, max_iterations=self.cfg.max_iterations, transcript=Transcript(user_query))
        logger.info("Starting agent loop with query: %s", user_query)

        indicator = None if self.cfg.show_thinking else self._indicator_factory()
        try:
            self._loop(state, indicator)
        finally:
            if indicator is not None:
                indicator.stop()

        if state.terminal_result is not None:
            return state.terminal_result

        last_action = state.transcript.describe_last_action()
        logger.warning("Agent reached max iterations (%d) while %s", state.max_iterations, last_action)
        return AgentResult(
            answer=exhaustion_message(state.max_iterations, last_action),
            exhausted=True,
            iterations=state.max_iterations,
        )

    def _loop(self, state: LoopState, indicator: LoadingIndicator | None) -> None:
        transcript = state.transcript
        for iteration in range(state.max_iterations):
            state.iteration = iteration
            logger.info("Agent iteration %d/%d", iteration + 1, state.max_iterations)

            reply = self.chat_client.chat(
                self.cfg.model,
                transcript.to_messages(),
                self.tools,
                self.cfg.enable_reasoning,
            )

            if indicator is not None:
                indicator.pause()
            self._report_reply(reply)

            transcript.add_assistant(reply.content, reply.tool_calls)

            if not reply.tool_calls:
                logger.info("Agent completed without tool calls")
                state.terminal_result = AgentResult(answer=reply.content, exhausted=False, iterations=iteration + 1)
                return

            logger.info("Model requested %d tool call(s)", len(reply.tool_calls))
            if indicator is not None:
                indicator.resume()
            for call in reply.tool_calls:
                result = self._run_tool(call)
                transcript.add_tool(result.source_tool_name, result.truncated_text)

    def _report_reply(self, reply: ChatReply) -> None:
        if reply.thinking:
            logger.info("Model thinking: %s", preview(reply.thinking, LOG_PREVIEW_CHARS))
            if self.cfg.show_thinking:
                self._writeln("\n🧠 Reasoning:")
                self._writeln(indent_block(reply.thinking))
        if reply.content:
            logger.info("Model response: %s", preview(reply.content, LOG_PREVIEW_CHARS))
            if self.cfg.show_thinking:
                self._writeln("\n💬 Response:")
                self._writeln(indent_block(reply.content))

    def _run_tool(self, call: ToolCall) -> ToolResult:
        try:
            raw = self.executor.execute(call)
        except InvalidArgumentsError as exc:
            if self.cfg.invalid_arguments_policy == "abort":
                raise
            logger.warning("Reporting invalid arguments for %s back to the model: %s", call.name, exc)
            raw = f"Error: Invalid arguments for '{call.name}': {exc}"
        except CollaboratorError as exc:
            if self.cfg.tool_error_policy == "abort":
                raise
            logger.warning("Reporting failed %s call back to the model: %s", call.name, exc)
            raw = f"Error: {call.name} failed: {exc}"

        result = ToolResult(source_tool_name=call.name, raw_text=raw, truncated_text=cap_tool_result(raw))
        logger.info("Tool %s executed, result length: %d bytes", call.name, utf8_len(result.raw_text))
        return result


__all__ = [
    "Agent",
    "AgentResult",
    "ChatProvider",
    "LoopState",
    "ToolResult",
    "exhaustion_message",
]
