"""Byte-budget truncation and small text helpers for Weavex."""

from __future__ import annotations

from .constants import TOOL_RESULT_MAX_BYTES, TRUNCATION_SUFFIX


def clean_text(text: str) -> str:
    """Replace lone surrogates (e.g. half of an escaped emoji in a JSON body) with U+FFFD.

    Valid surrogate pairs are joined into their character; the result always
    encodes to UTF-8.
    """
    return text.encode("utf-16", "surrogatepass").decode("utf-16", "replace")


def utf8_len(text: str) -> int:
    return len(clean_text(text).encode("utf-8"))


def truncate_utf8(text: str, max_bytes: int) -> str:
    """Cut text to at most max_bytes of UTF-8 without splitting a character.

    Args:
        text: Text to truncate
        max_bytes: Byte budget (negative budgets are treated as zero)

    Returns:
        The text (with lone surrogates replaced) unchanged when it fits,
        otherwise its longest prefix that encodes to max_bytes or fewer bytes
    """
    text = clean_text(text)
    encoded = text.encode("utf-8")
    if len(encoded) <= max_bytes:
        return text
    end = max(max_bytes, 0)
    # Continuation bytes look like 0b10xxxxxx; step back to a lead byte
    while end > 0 and (encoded[end] & 0xC0) == 0x80:
        end -= 1
    return encoded[:end].decode("utf-8")


def cap_tool_result(text: str, max_bytes: int = TOOL_RESULT_MAX_BYTES) -> str:
    """Apply the transcript ceiling to a rendered tool result.

    Text over the budget is cut on a character boundary and marked with
    TRUNCATION_SUFFIX; the suffix is not counted against the budget.
    """
    text = clean_text(text)
    if utf8_len(text) <= max_bytes:
        return text
    return f"{truncate_utf8(text, max_bytes)}{TRUNCATION_SUFFIX}"


def preview(text: str, max_chars: int) -> str:
    """Return the first max_chars characters, for log lines."""
    return text[:max_chars]


def indent_block(text: str, prefix: str = "   ") -> str:
    """Indent every line of a multi-line diagnostic block."""
    return prefix + text.replace("\n", f"\n{prefix}")


__all__ = [
    "cap_tool_result",
    "clean_text",
    "indent_block",
    "preview",
    "truncate_utf8",
    "utf8_len",
]
