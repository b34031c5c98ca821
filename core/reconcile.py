# =============================================================================
# core/reconcile.py  -  The Result Reconciler
# =============================================================================
#
# Merges the execution outcome with the reasoning and identifiers into the
# caller-visible ToolInvocationRecord.  Exactly one of result/error is
# copied across, chosen by which one the outcome populated.
# =============================================================================

from typing import Any

from core.models import DYNAMIC_TOOL_URI_PREFIX, ExecutionOutcome, ToolInvocationRecord


def dynamic_tool_uri(tool_name: str) -> str:
    return f"{DYNAMIC_TOOL_URI_PREFIX}{tool_name}"


def reconcile(
    outcome: ExecutionOutcome,
    reasoning: str,
    tool_name: str,
    generated_input: Any,
) -> ToolInvocationRecord:
    """Build the final record for one invocation."""
    if outcome.failed:
        return ToolInvocationRecord(
            reasoning=reasoning,
            tool_uri=dynamic_tool_uri(tool_name),
            generated_input=generated_input,
            error=outcome.error,
        )
    return ToolInvocationRecord(
        reasoning=reasoning,
        tool_uri=dynamic_tool_uri(tool_name),
        generated_input=generated_input,
        result=outcome.result,
    )
