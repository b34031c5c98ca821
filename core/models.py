# =============================================================================
# core/models.py  -  Data Models (the "nouns" of the pipeline)
# =============================================================================
#
# These dataclasses define the *shape* of every piece of information that
# flows through one tool-synthesis request:
#
#   query ─▶ GenerationRequest ─▶ (raw reply) ─▶ GeneratedTool
#         ─▶ ExecutionOutcome ─▶ ToolInvocationRecord
#
# Everything here lives for exactly one call.  Nothing is cached, persisted,
# or shared between calls, except the CapabilityDescriptor entries of the
# catalog, which are frozen at import time.
#
# The raw reply from the generation backend deliberately has NO model here.
# It is a plain dict until core/validation.py turns it into a GeneratedTool.
# =============================================================================

from dataclasses import dataclass, field
from typing import Any, Optional


# The fixed prefix every synthesized toolUri carries.
DYNAMIC_TOOL_URI_PREFIX = "DYNAMIC::"


# -----------------------------------------------------------------------------
# CapabilityDescriptor - one host operation the generated code may call
# -----------------------------------------------------------------------------
@dataclass(frozen=True)
class CapabilityDescriptor:
    """A named host capability, exposed to generated code as ctx.env.SELF.<id>."""

    id: str                            # "LIST_TODOS"
    signature: str                     # "{ id: number }" - the call argument shape
    description: str                   # "List all todos"


# -----------------------------------------------------------------------------
# GenerationRequest - what we send to the generative backend
# -----------------------------------------------------------------------------
@dataclass
class GenerationRequest:
    """A single structured-generation request, built fresh per query."""

    system_instruction: str
    user_instruction: str              # query + catalog + format contract + examples
    reply_schema: dict[str, Any]
    temperature: float = 0.3
    model: Optional[str] = None        # None = let the client pick its default

    def messages(self) -> list[dict[str, str]]:
        """The ordered role/content list: system first, then user."""
        return [
            {"role": "system", "content": self.system_instruction},
            {"role": "user", "content": self.user_instruction},
        ]


# -----------------------------------------------------------------------------
# ToolDescriptor - the validated, typed description of a synthesized tool
# -----------------------------------------------------------------------------
@dataclass(frozen=True)
class ToolDescriptor:
    """A synthesized tool that passed validation and may be executed.

    `code` is byte-identical to what the backend produced.  The schemas are
    advisory documentation only; they default to {} instead of failing.
    """

    name: str
    description: str
    code: str
    input_schema: dict[str, Any] = field(default_factory=dict)
    output_schema: dict[str, Any] = field(default_factory=dict)

    def to_tool_definition(self) -> dict[str, Any]:
        """Wire shape expected by the execution capability."""
        return {
            "name": self.name,
            "description": self.description,
            "inputSchema": self.input_schema,
            "outputSchema": self.output_schema,
            "execute": self.code,
        }


@dataclass(frozen=True)
class GeneratedTool:
    """Everything the validator extracted from one reply."""

    descriptor: ToolDescriptor
    generated_input: dict[str, Any] = field(default_factory=dict)
    reasoning: str = ""


# -----------------------------------------------------------------------------
# ExecutionOutcome - what came back from the execution capability
# -----------------------------------------------------------------------------
@dataclass(frozen=True)
class ExecutionOutcome:
    """Either a result or an error, never both."""

    result: Any = None
    error: Optional[str] = None

    def __post_init__(self):
        if self.error is not None and self.result is not None:
            raise ValueError("ExecutionOutcome cannot carry both result and error")

    @classmethod
    def success(cls, result: Any) -> "ExecutionOutcome":
        return cls(result=result)

    @classmethod
    def failure(cls, error: str) -> "ExecutionOutcome":
        return cls(error=error)

    @property
    def failed(self) -> bool:
        return self.error is not None


# -----------------------------------------------------------------------------
# ToolInvocationRecord - the caller-visible envelope
# -----------------------------------------------------------------------------
@dataclass(frozen=True)
class ToolInvocationRecord:
    """The final answer for one query.

    Produced only when a descriptor exists.  Precondition failures never
    produce a record; they raise instead (see core/errors.py).
    """

    reasoning: str
    tool_uri: str
    generated_input: Any
    result: Any = None
    error: Optional[str] = None

    def to_dict(self) -> dict[str, Any]:
        """Render with the caller-facing keys, omitting an absent result/error."""
        out: dict[str, Any] = {
            "reasoning": self.reasoning,
            "toolUri": self.tool_uri,
            "generatedInput": self.generated_input,
        }
        if self.error is not None:
            out["error"] = self.error
        elif self.result is not None:
            out["result"] = self.result
        return out
