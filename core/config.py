# =============================================================================
# core/config.py  -  Runtime Settings
# =============================================================================
#
# All settings come from environment variables.  Entry points (main.py,
# tools/mcp_server.py) call load_dotenv() first, so a local .env file works
# the same as exported variables.
#
#   GENERATION_MODEL        litellm model id for tool synthesis
#   GENERATION_TEMPERATURE  sampling temperature for tool synthesis
#   TOOL_RUNNER_URL         MCP endpoint of the execution capability
#   TOOL_RUNNER_TOOL        name of the run-tool operation on that endpoint
#   TOOL_RUNNER_TIMEOUT_S   per-call timeout for the execution capability
#   ASSISTANT_MODEL         litellm model id for the chat front end (main.py)
# =============================================================================

import os
from dataclasses import dataclass
from typing import Mapping, Optional


def _float_env(env: Mapping[str, str], name: str, default: float) -> float:
    raw = env.get(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return float(raw)
    except ValueError:
        raise ValueError(f"{name} must be a number, got {raw!r}") from None


@dataclass(frozen=True)
class Settings:
    generation_model: str = "openai/gpt-4.1-mini"
    generation_temperature: float = 0.3
    tool_runner_url: str = "http://localhost:8000/mcp"
    tool_runner_tool: str = "DECO_TOOL_RUN_TOOL"
    tool_runner_timeout_s: float = 60.0
    assistant_model: str = "openrouter/openai/gpt-4o"

    @classmethod
    def from_env(cls, env: Optional[Mapping[str, str]] = None) -> "Settings":
        env = os.environ if env is None else env
        defaults = cls()
        return cls(
            generation_model=env.get("GENERATION_MODEL") or defaults.generation_model,
            generation_temperature=_float_env(
                env, "GENERATION_TEMPERATURE", defaults.generation_temperature
            ),
            tool_runner_url=env.get("TOOL_RUNNER_URL") or defaults.tool_runner_url,
            tool_runner_tool=env.get("TOOL_RUNNER_TOOL") or defaults.tool_runner_tool,
            tool_runner_timeout_s=_float_env(
                env, "TOOL_RUNNER_TIMEOUT_S", defaults.tool_runner_timeout_s
            ),
            assistant_model=env.get("ASSISTANT_MODEL") or defaults.assistant_model,
        )
