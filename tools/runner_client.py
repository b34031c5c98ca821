# =============================================================================
# tools/runner_client.py  -  Execution Capability Client (FastMCP)
# =============================================================================
#
# WHAT THIS FILE DOES:
#   Implements core.executor.ToolRunner by calling a remote MCP tool that
#   runs an arbitrary tool definition inside its own sandbox.  The default
#   operation name is DECO_TOOL_RUN_TOOL and it takes:
#
#     {
#       "tool":  {"name", "description", "inputSchema", "outputSchema", "execute"},
#       "input": <JSON value>
#     }
#
#   and answers with {"result": ...} or {"error": ...}.
#
# ONE CONNECTION PER CALL:
#   Each run_tool() opens its own client session and closes it before
#   returning, so no handle is held across requests or suspension points.
#
# ERRORS:
#   Connection failures and timeouts are raised as-is.  core/executor.py
#   catches them and converts them into ExecutionOutcome.error.  An MCP
#   tool error (is_error=True) is returned as a reported {"error": ...}.
# =============================================================================

import json
from typing import Any

from fastmcp import Client

from core.models import ToolDescriptor

DEFAULT_RUN_TOOL_NAME = "DECO_TOOL_RUN_TOOL"


def _text_of(result: Any) -> str:
    parts = []
    for block in getattr(result, "content", None) or []:
        text = getattr(block, "text", None)
        if text:
            parts.append(text)
    return "\n".join(parts)


def _as_report(value: Any) -> dict[str, Any]:
    if isinstance(value, dict) and ("result" in value or "error" in value):
        return value
    return {"result": value}


def report_from_call_result(result: Any) -> dict[str, Any]:
    """Turn an MCP CallToolResult into the {result?, error?} report shape."""
    text = _text_of(result)
    if getattr(result, "is_error", False):
        return {"error": text or "Tool execution failed"}

    structured = getattr(result, "structured_content", None)
    if isinstance(structured, dict):
        return _as_report(structured)

    if not text:
        return {"result": None}
    try:
        decoded = json.loads(text)
    except json.JSONDecodeError:
        return {"result": text}
    return _as_report(decoded)


class McpToolRunner:
    """ToolRunner that delegates to a remote MCP run-tool operation.

    Args:
        transport: Anything fastmcp.Client accepts (an http(s) URL, a script
            path, or an in-process FastMCP server).
        tool_name: Name of the run-tool operation on that server.
        timeout_s: Per-request timeout in seconds.
    """

    def __init__(self, transport: Any, tool_name: str = DEFAULT_RUN_TOOL_NAME, timeout_s: float = 60.0):
        self.transport = transport
        self.tool_name = tool_name
        self.timeout_s = timeout_s

    async def run_tool(self, descriptor: ToolDescriptor, tool_input: Any) -> dict[str, Any]:
        arguments = {"tool": descriptor.to_tool_definition(), "input": tool_input}
        async with Client(self.transport, timeout=self.timeout_s) as client:
            result = await client.call_tool(self.tool_name, arguments, raise_on_error=False)
        return report_from_call_result(result)
