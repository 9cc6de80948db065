"""Transcript management for a single agent run.

The transcript is the ordered list of turns replayed to the chat endpoint on
every round. It always starts with exactly one user turn; tool turns follow
the assistant turn whose tool calls they answer, in the same order.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, Iterator, List

from .constants import Role, ToolName
from .models import ToolCall

logger = logging.getLogger(__name__)

_ACTION_PHRASES: Dict[str, str] = {
    ToolName.WEB_SEARCH.value: "searching the web",
    ToolName.WEB_FETCH.value: "fetching a webpage",
}


@dataclass
class Turn:
    """One transcript entry."""

    role: Role
    content: str = ""
    tool_calls: List[ToolCall] | None = None
    tool_name: str | None = None

    def to_message(self) -> Dict[str, Any]:
        message: Dict[str, Any] = {"role": self.role.value, "content": self.content}
        if self.role is Role.ASSISTANT and self.tool_calls:
            message["tool_calls"] = [call.to_message() for call in self.tool_calls]
        if self.role is Role.TOOL and self.tool_name is not None:
            message["tool_name"] = self.tool_name
        return message


class Transcript:
    """Ordered turns of one run, seeded with the user's query."""

    def __init__(self, user_query: str) -> None:
        self.turns: List[Turn] = [Turn(Role.USER, user_query)]

    def __len__(self) -> int:
        return len(self.turns)

    def __iter__(self) -> Iterator[Turn]:
        return iter(self.turns)

    def add_assistant(self, content: str, tool_calls: List[ToolCall] | None = None) -> Turn:
        turn = Turn(Role.ASSISTANT, content, tool_calls=list(tool_calls) if tool_calls else None)
        self.turns.append(turn)
        return turn

    def add_tool(self, tool_name: str, content: str) -> Turn:
        answered = 0
        for previous in reversed(self.turns):
            if previous.role is not Role.TOOL:
                break
            answered += 1
        if previous.role is not Role.ASSISTANT or not previous.tool_calls or answered >= len(previous.tool_calls):
            raise ValueError("Tool turn does not answer a pending tool call")
        expected = previous.tool_calls[answered].name
        if tool_name != expected:
            raise ValueError(f"Tool turn for '{tool_name}' answers a pending '{expected}' call out of order")
        turn = Turn(Role.TOOL, content, tool_name=tool_name)
        self.turns.append(turn)
        return turn

    def to_messages(self) -> List[Dict[str, Any]]:
        """Format the transcript for the chat endpoint."""
        return [turn.to_message() for turn in self.turns]

    def describe_last_action(self) -> str:
        """Describe what the agent was doing, for the exhaustion message.

        Scans backwards: a tool turn means the model was processing a tool
        response; an assistant turn with tool calls names its first call;
        otherwise the model was reasoning.
        """
        for turn in reversed(self.turns):
            if turn.role is Role.TOOL:
                return "processing tool response"
            if turn.tool_calls:
                name = turn.tool_calls[0].name
                return _ACTION_PHRASES.get(name, f"using {name}")
        return "reasoning"


__all__ = ["Transcript", "Turn"]
