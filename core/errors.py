# =============================================================================
# core/errors.py  -  Pipeline Exceptions
# =============================================================================
#
# Two families of failure exist in the pipeline, and they are handled very
# differently:
#
#   PRECONDITION failures (ToolGenerationError and subclasses)
#     The backend did not give us a runnable tool.  There is nothing to
#     execute, so the whole call aborts and the caller sees an exception.
#
#   EXECUTION failures
#     These are NOT exceptions at this level.  core/executor.py folds them
#     into ExecutionOutcome.error and the caller gets a normal envelope.
#
# GenerationError sits outside both: the backend answered, but not with a
# JSON object.  It propagates like any other transport failure.
# =============================================================================

from core.prompt import REQUIRED_CODE_PREFIX


class GenerationError(Exception):
    """The generation backend replied with something that is not a JSON object."""


class ToolGenerationError(Exception):
    """Base class for failures that abort the pipeline before execution."""


class MissingFieldError(ToolGenerationError):
    """The reply lacked a tool name or tool code."""

    def __init__(self, message: str = "Failed to generate tool code"):
        super().__init__(message)


class CodeFormatError(ToolGenerationError):
    """The generated code does not declare the required entry point.

    The message always carries the exact required prefix so it can be fed
    back to the backend verbatim.
    """

    def __init__(self):
        super().__init__(
            "Generated code is not in the correct ES module format. "
            f"Code must start with '{REQUIRED_CODE_PREFIX}'"
        )
