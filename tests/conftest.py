from __future__ import annotations

import sys
from pathlib import Path

import pytest

# Ensure the project root (which contains the `weavex` package) is importable during tests.
PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))


@pytest.fixture(autouse=True)
def _isolate_env(monkeypatch: pytest.MonkeyPatch) -> None:
    # Config defaults read these; keep the developer's shell out of the tests
    for name in ("OLLAMA_API_KEY", "OLLAMA_BASE_URL", "OLLAMA_TIMEOUT", "WEAVEX_MODEL"):
        monkeypatch.delenv(name, raising=False)
