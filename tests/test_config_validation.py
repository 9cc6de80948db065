"""Tests for AgentConfig validation."""

from __future__ import annotations

import pytest

from weavex.config import AgentConfig
from weavex.exceptions import ConfigurationError, MissingApiKeyError


class TestDefaults:
    """Default values and environment overrides."""

    def test_defaults(self) -> None:
        cfg = AgentConfig()
        assert cfg.api_key is None
        assert cfg.base_url == "https://ollama.com/api"
        assert cfg.timeout == 30.0
        assert cfg.max_results is None
        assert cfg.model == "gpt-oss:20b"
        assert cfg.ollama_url == "http://localhost:11434"
        assert cfg.max_iterations == 50
        assert cfg.show_thinking is False
        assert cfg.enable_reasoning is True
        assert cfg.invalid_arguments_policy == "abort"
        assert cfg.tool_error_policy == "abort"

    def test_environment_overrides(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("OLLAMA_API_KEY", "k")
        monkeypatch.setenv("OLLAMA_BASE_URL", "https://proxy.test/api")
        monkeypatch.setenv("OLLAMA_TIMEOUT", "90")
        monkeypatch.setenv("WEAVEX_MODEL", "qwen3:8b")
        cfg = AgentConfig()
        assert cfg.api_key == "k"
        assert cfg.base_url == "https://proxy.test/api"
        assert cfg.timeout == 90.0
        assert cfg.model == "qwen3:8b"

    def test_unparsable_timeout_env_keeps_default(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("OLLAMA_TIMEOUT", "soon")
        assert AgentConfig().timeout == 30.0

    def test_empty_api_key_env_is_missing(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("OLLAMA_API_KEY", "")
        assert AgentConfig().api_key is None


class TestValidation:
    """Constraint violations surface as ConfigurationError."""

    def test_max_results_range(self) -> None:
        AgentConfig(max_results=1)
        AgentConfig(max_results=10)
        with pytest.raises(ConfigurationError, match=r"max_results must be in \[1, 10\], got 0"):
            AgentConfig(max_results=0)
        with pytest.raises(ConfigurationError, match=r"max_results must be in \[1, 10\], got 11"):
            AgentConfig(max_results=11)

    def test_max_iterations_minimum(self) -> None:
        assert AgentConfig(max_iterations=1).max_iterations == 1
        with pytest.raises(ConfigurationError, match="max_iterations must be >= 1, got 0"):
            AgentConfig(max_iterations=0)

    @pytest.mark.parametrize("field", ["timeout", "chat_timeout", "indicator_interval"])
    def test_positive_durations(self, field: str) -> None:
        with pytest.raises(ConfigurationError, match=f"{field} must be > 0"):
            AgentConfig(**{field: 0})

    def test_policy_literal(self) -> None:
        with pytest.raises(ConfigurationError, match="tool_error_policy must be"):
            AgentConfig(tool_error_policy="retry")

    def test_unknown_option(self) -> None:
        with pytest.raises(ConfigurationError, match="Unknown configuration option: max_rounds"):
            AgentConfig(max_rounds=3)

    def test_validate_on_assignment(self) -> None:
        cfg = AgentConfig()
        with pytest.raises(Exception):
            cfg.max_iterations = 0


class TestApiKey:
    def test_require_api_key(self) -> None:
        assert AgentConfig(api_key="abc").require_api_key() == "abc"

    def test_missing_api_key_message(self) -> None:
        with pytest.raises(MissingApiKeyError) as exc_info:
            AgentConfig().require_api_key()
        message = str(exc_info.value)
        assert "Set OLLAMA_API_KEY environment variable or use --api-key flag" in message
        assert "https://ollama.com" in message
        assert isinstance(exc_info.value, ConfigurationError)
