# =============================================================================
# core/executor.py  -  The Sandbox Executor
# =============================================================================
#
# WHAT THIS MODULE DOES:
#   Hands a validated ToolDescriptor and its generated input to the external
#   execution capability, and turns whatever happens into an
#   ExecutionOutcome VALUE.
#
# WHAT IT DOES NOT DO:
#   It never interprets the generated code and offers no isolation of its
#   own.  Isolation is entirely the execution capability's contract.
#
# TWO FAILURE PATHS, ONE SHAPE:
#   a) The runner raises            → {error: str(exc)} or "Unknown error occurred"
#   b) The runner reports an error  → {error: <error serialized to a string>}
#
#   Execution failures therefore never leave this module as exceptions.
#   asyncio.CancelledError is not an execution failure: it is a BaseException
#   and passes straight through to the caller.
# =============================================================================

import json
import logging
from typing import Any, Mapping, Protocol

from core.models import ExecutionOutcome, ToolDescriptor

logger = logging.getLogger(__name__)

UNKNOWN_ERROR_MESSAGE = "Unknown error occurred"


class ToolRunner(Protocol):
    """The one operation the pipeline needs from the execution capability."""

    async def run_tool(self, descriptor: ToolDescriptor, tool_input: Any) -> Mapping[str, Any]:
        ...


def describe_exception(exc: BaseException) -> str:
    message = str(exc).strip()
    return message or UNKNOWN_ERROR_MESSAGE


def serialize_error(error: Any) -> str:
    """Reported errors may be strings or structured objects; both become text."""
    if isinstance(error, str):
        return error
    try:
        return json.dumps(error, ensure_ascii=False, default=str)
    except (TypeError, ValueError):
        return str(error)


def is_reported_error(error: Any) -> bool:
    """Falsy errors (None, "", 0, False) mean success; anything else is a failure."""
    if error is None or isinstance(error, (bool, int, float, str)):
        return bool(error)
    return True


def outcome_from_report(report: Any) -> ExecutionOutcome:
    """Normalize the runner's {result?, error?} report."""
    if not isinstance(report, Mapping):
        # A bare value is taken as the result itself.
        return ExecutionOutcome.success(report)
    error = report.get("error")
    if is_reported_error(error):
        return ExecutionOutcome.failure(serialize_error(error))
    return ExecutionOutcome.success(report.get("result"))


async def execute_tool(
    runner: ToolRunner,
    descriptor: ToolDescriptor,
    tool_input: Any,
) -> ExecutionOutcome:
    """Run `descriptor` against `tool_input` through `runner`.

    Never raises for execution problems; see module docs.
    """
    try:
        report = await runner.run_tool(descriptor, tool_input)
    except Exception as exc:
        logger.error("Exception during tool execution: %r", exc)
        return ExecutionOutcome.failure(describe_exception(exc))

    outcome = outcome_from_report(report)
    if outcome.failed:
        logger.error("Tool execution error: %s", outcome.error)
    return outcome
