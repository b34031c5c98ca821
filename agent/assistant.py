# =============================================================================
# agent/assistant.py  -  Google ADK Chat Front End
# =============================================================================
#
# WHAT THIS FILE DOES:
#   Creates the conversational agent that sits in front of the
#   tool-synthesis pipeline.  It talks to the user, and whenever the user
#   wants something done it calls AI_TOOL_EXECUTOR on our FastMCP server.
#
#   ┌─────────────────────────┐   stdio / MCP   ┌──────────────────────────┐
#   │  ADK Agent (LiteLlm)    │ ──────────────▶ │  tools/mcp_server.py     │
#   │  agent/prompt.py        │                 │   AI_TOOL_EXECUTOR       │
#   └─────────────────────────┘                 │   LIST_CAPABILITIES      │
#                                               └────────────┬─────────────┘
#                                                            ▼
#                                               core/pipeline.py
#
# MCP CONNECTION:
#   ADK starts the server as a subprocess with `uv run python -m
#   tools.mcp_server` from the project root, so the subprocess resolves the
#   project's .venv and packages.
# =============================================================================

import os
from typing import Optional

from google.adk.agents import Agent
from google.adk.models.lite_llm import LiteLlm
from google.adk.tools.mcp_tool import MCPToolset
from mcp import StdioServerParameters

from agent.prompt import get_assistant_prompt
from core.config import Settings


def create_agent(settings: Optional[Settings] = None) -> Agent:
    """Create the todo assistant agent.

    Args:
        settings: Runtime settings; read from the environment when omitted.

    Returns:
        A configured Google ADK Agent whose only tools come from the
        dynamic-tool-executor MCP server.
    """
    settings = settings or Settings.from_env()
    project_root = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))

    mcp_tools = MCPToolset(
        connection_params=StdioServerParameters(
            command="uv",
            args=["run", "python", "-m", "tools.mcp_server"],
            cwd=project_root,
        ),
    )

    return Agent(
        name="todo_assistant",
        model=LiteLlm(model=settings.assistant_model),
        instruction=get_assistant_prompt(),
        tools=[mcp_tools],
    )
