from __future__ import annotations

import pytest

from weavex import exceptions as E


@pytest.mark.parametrize(
    "exc_type, base",
    [
        (E.ConfigurationError, E.WeavexError),
        (E.MissingApiKeyError, E.ConfigurationError),
        (E.CollaboratorError, E.WeavexError),
        (E.TransportError, E.CollaboratorError),
        (E.ApiError, E.CollaboratorError),
        (E.InvalidResponseError, E.CollaboratorError),
        (E.ToolError, E.WeavexError),
        (E.InvalidArgumentsError, E.ToolError),
        (E.UnknownToolError, E.ToolError),
    ],
)
def test_hierarchy(exc_type, base) -> None:
    assert issubclass(exc_type, base)


def test_api_error_fields() -> None:
    err = E.ApiError(503, "overloaded")
    assert err.status == 503
    assert err.message == "overloaded"
    assert str(err) == "API returned error: 503 - overloaded"


def test_tool_error_carries_name() -> None:
    err = E.InvalidArgumentsError("web_fetch", "URL cannot be empty in web_fetch")
    assert err.tool_name == "web_fetch"
    assert str(err) == "URL cannot be empty in web_fetch"


def test_missing_api_key_custom_message() -> None:
    assert str(E.MissingApiKeyError("no key")) == "no key"


def test_command_error_is_reported_by_cli() -> None:
    from weavex import main as M

    assert issubclass(E.CommandError, E.WeavexError)
    assert M.CommandError is E.CommandError
    assert "CommandError" in E.__all__
