# =============================================================================
# tools/mcp_server.py  -  FastMCP Tool Server
# =============================================================================
#
# WHAT THIS FILE DOES:
#   Exposes the tool-synthesis pipeline to MCP clients (the chat front end in
#   agent/assistant.py, or any other MCP host):
#
#     AI_TOOL_EXECUTOR(query)   → synthesize + run a one-off tool, return the
#                                 {reasoning, toolUri, generatedInput,
#                                  result?, error?} envelope
#     LIST_CAPABILITIES()       → the host capabilities generated code may use
#
# ERROR CONTRACT:
#   - Execution problems come back INSIDE the envelope (error field).
#   - Precondition failures (no runnable tool was generated) are raised as
#     ToolError, which MCP reports to the client as a failed tool call with
#     the human-readable message.
#
# RUNNING THIS SERVER:
#   a) Standalone:  python -m tools.mcp_server
#   b) Spawned by the chat front end over stdio transport
# =============================================================================

import json
import logging
import sys
from typing import Optional

from dotenv import load_dotenv
from fastmcp import FastMCP
from fastmcp.exceptions import ToolError

from agent.generation import LiteLlmGenerationClient
from core.catalog import CAPABILITY_CATALOG
from core.config import Settings
from core.errors import ToolGenerationError
from core.pipeline import ToolSynthesisPipeline
from tools.runner_client import McpToolRunner

load_dotenv()

# =============================================================================
# Logging Setup
# =============================================================================
# We log to STDERR because stdout carries the MCP protocol when this server
# runs over stdio.  Anything printed to stdout would corrupt the stream.
# =============================================================================

_CYAN = "\033[36m"     # Requests
_GREEN = "\033[32m"    # Responses
_YELLOW = "\033[33m"   # Status/progress
_RED = "\033[31m"      # Rejected requests
_RESET = "\033[0m"

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [MCP] %(message)s",
    datefmt="%H:%M:%S",
    stream=sys.stderr,
)


def _log_request(tool_name: str, **params) -> None:
    param_str = ", ".join(f"{k}={v!r}" for k, v in params.items())
    logging.info(f"{_CYAN}{tool_name} called with: {param_str}{_RESET}")


def _log_status(message: str) -> None:
    logging.info(f"{_YELLOW}  → {message}{_RESET}")


def _log_rejection(tool_name: str, message: str) -> None:
    logging.error(f"{_RED}  ✗ {tool_name} rejected: {message}{_RESET}")


def _log_response(tool_name: str, result: dict) -> dict:
    logging.info(f"{_GREEN}  ← {tool_name} response: {json.dumps(result, separators=(',', ':'), default=str)}{_RESET}")
    return result


# =============================================================================
# Pipeline wiring
# =============================================================================
# Built on first use so importing this module never needs credentials or a
# reachable execution capability.  Embedders and tests can install their
# own pipeline with set_pipeline().
# =============================================================================
_pipeline: Optional[ToolSynthesisPipeline] = None


def build_pipeline(settings: Optional[Settings] = None) -> ToolSynthesisPipeline:
    settings = settings or Settings.from_env()
    return ToolSynthesisPipeline(
        generator=LiteLlmGenerationClient(model=settings.generation_model),
        runner=McpToolRunner(
            settings.tool_runner_url,
            tool_name=settings.tool_runner_tool,
            timeout_s=settings.tool_runner_timeout_s,
        ),
        catalog=CAPABILITY_CATALOG,
        temperature=settings.generation_temperature,
    )


def get_pipeline() -> ToolSynthesisPipeline:
    global _pipeline
    if _pipeline is None:
        _pipeline = build_pipeline()
    return _pipeline


def set_pipeline(pipeline: Optional[ToolSynthesisPipeline]) -> None:
    global _pipeline
    _pipeline = pipeline


mcp = FastMCP("dynamic-tool-executor")


# =============================================================================
# TOOL 1: AI_TOOL_EXECUTOR
# =============================================================================
@mcp.tool(name="AI_TOOL_EXECUTOR")
async def ai_tool_executor(query: str) -> dict:
    """Use AI to determine which tool to call and generate its input based on a natural language query.

    Args:
        query: What the user wants done, in plain language
               (e.g., "list my todos", "mark todo 3 as done").

    Returns:
        A dict with:
          - reasoning: Why the generated tool does what it does
          - toolUri: "DYNAMIC::<generated tool name>"
          - generatedInput: The input the generated tool was run with
          - result: The tool's output (absent on failure)
          - error: Why execution failed (absent on success)
    """
    _log_request("AI_TOOL_EXECUTOR", query=query)

    try:
        record = await get_pipeline().run(query)
    except ToolGenerationError as exc:
        _log_rejection("AI_TOOL_EXECUTOR", str(exc))
        raise ToolError(str(exc)) from exc

    if record.error is not None:
        _log_status(f"{record.tool_uri} failed: {record.error}")
    else:
        _log_status(f"{record.tool_uri} succeeded")
    return _log_response("AI_TOOL_EXECUTOR", record.to_dict())


# =============================================================================
# TOOL 2: LIST_CAPABILITIES
# =============================================================================
@mcp.tool(name="LIST_CAPABILITIES")
def list_capabilities() -> dict:
    """List the host operations that AI_TOOL_EXECUTOR's generated tools can call.

    Returns:
        A dict with `capabilities`: a list of {id, signature, description}.
    """
    _log_request("LIST_CAPABILITIES")
    return _log_response("LIST_CAPABILITIES", {
        "capabilities": [
            {"id": c.id, "signature": c.signature, "description": c.description}
            for c in CAPABILITY_CATALOG
        ],
    })


if __name__ == "__main__":
    mcp.run()
