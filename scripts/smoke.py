from __future__ import annotations

import sys


def main() -> int:
    # Ensure project root on path if executed directly
    sys.path.insert(0, ".")

    try:
        from weavex.agent import Agent
        from weavex.cli import _AGENT_SPECS, _GLOBAL_SPECS, parse_args
        from weavex.config import AgentConfig
        from weavex.constants import ToolName
        from weavex.web_client import WebClient
    except ModuleNotFoundError as e:  # pragma: no cover - CI discovery failure
        missing_root = getattr(e, "name", "").split(".")[0]
        if missing_root != "weavex":
            raise
        print("IMPORT_FAIL:", type(e).__name__, str(e))
        return 1

    try:
        # 1) CLI defaults must equal AgentConfig defaults (single source of truth)
        ns_defaults = vars(parse_args(["agent", "healthcheck"]))
        cfg_defaults = AgentConfig().model_dump()

        for spec in [*_GLOBAL_SPECS, *_AGENT_SPECS]:
            if spec.default_attr is None:
                continue
            key = spec.dest or spec.default_attr
            if ns_defaults.get(key, object()) != cfg_defaults[spec.default_attr]:
                print(f"DEFAULT_MISMATCH: {key}: cli={ns_defaults.get(key)} cfg={cfg_defaults[spec.default_attr]}")
                return 1

        # 2) Instantiate Agent without invoking the chat model or the web API
        cfg = AgentConfig(api_key="healthcheck", max_iterations=1)
        agent = Agent(cfg)

        # 3) Tool registry advertises every executable tool
        names = [tool["function"]["name"] for tool in agent.tools]
        expected = [tool.value for tool in ToolName]
        if names != expected:
            print("TOOL_REGISTRY_MISMATCH:", ", ".join(names))
            return 1

        # 4) Web client wired from config
        if not isinstance(agent.web_client, WebClient):
            print("WEB_CLIENT_MISMATCH: agent web client is not a WebClient")
            return 1
        agent.web_client.close()

        print("SMOKE_OK")
        return 0

    except Exception as e:  # pragma: no cover - defensive CI capture
        print("SMOKE_FAIL:", type(e).__name__, str(e))
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
