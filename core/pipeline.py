# =============================================================================
# core/pipeline.py  -  The Tool-Synthesis Pipeline
# =============================================================================
#
# HOW ONE QUERY FLOWS (strictly linear, no retries):
#
#   Composing ─▶ Generating ─▶ Validating ─┬─▶ Executing ─▶ Reconciling ─▶ Done
#                                          └─▶ Aborted (ToolGenerationError)
#
#   - Composing:   core/prompt.py builds the GenerationRequest (in-process)
#   - Generating:  the injected generator is awaited (network)
#   - Validating:  core/validation.py, the only place that can abort
#   - Executing:   core/executor.py awaits the injected runner (network)
#   - Reconciling: core/reconcile.py builds the ToolInvocationRecord
#
# INJECTED CAPABILITIES:
#   The pipeline never reaches for a global client.  Both external
#   capabilities are passed in at construction:
#     generator.generate(request)             -> raw reply mapping
#     runner.run_tool(descriptor, tool_input) -> {result?, error?}
#   Tests pass fakes; production passes agent/generation.py and
#   tools/runner_client.py.
#
# CANCELLATION:
#   Cancelling run() cancels whichever of the two awaits is in flight.
#   Nothing is held open between them, so there is nothing to clean up.
# =============================================================================

import json
import logging
import uuid
from typing import Any, Iterable, Mapping, Optional, Protocol

from core.catalog import CAPABILITY_CATALOG
from core.errors import ToolGenerationError
from core.executor import ToolRunner, execute_tool
from core.models import CapabilityDescriptor, GenerationRequest, ToolInvocationRecord
from core.prompt import DEFAULT_TEMPERATURE, compose_generation_request
from core.reconcile import reconcile
from core.validation import validate_reply

logger = logging.getLogger(__name__)


class GenerationClient(Protocol):
    async def generate(self, request: GenerationRequest) -> Mapping[str, Any]:
        ...


def _pretty(value: Any) -> str:
    return json.dumps(value, indent=2, ensure_ascii=False, default=str)


class ToolSynthesisPipeline:
    """Synthesize, validate, execute and reconcile one tool per query."""

    def __init__(
        self,
        generator: GenerationClient,
        runner: ToolRunner,
        catalog: Iterable[CapabilityDescriptor] = CAPABILITY_CATALOG,
        temperature: float = DEFAULT_TEMPERATURE,
        model: Optional[str] = None,
    ):
        self.generator = generator
        self.runner = runner
        self.catalog = tuple(catalog)
        self.temperature = temperature
        self.model = model

    async def run(self, query: str) -> ToolInvocationRecord:
        """Answer one query.

        Raises:
            ToolGenerationError: the backend did not produce a runnable tool.
            Exception: generation transport failures, unchanged.

        Execution failures never raise; they come back in record.error.
        """
        invocation_id = uuid.uuid4().hex[:8]
        logger.info("[%s] synthesizing tool for query: %r", invocation_id, query)

        request = compose_generation_request(
            query, self.catalog, temperature=self.temperature, model=self.model
        )
        raw = await self.generator.generate(request)
        logger.debug("[%s] AI response: %s", invocation_id, _pretty(raw))

        try:
            generated = validate_reply(raw)
        except ToolGenerationError as exc:
            logger.error("[%s] rejected generated tool: %s", invocation_id, exc)
            raise
        descriptor = generated.descriptor
        logger.debug("[%s] generated execute code:\n%s", invocation_id, descriptor.code)
        logger.info(
            "[%s] executing %s with input: %s",
            invocation_id,
            descriptor.name,
            _pretty(generated.generated_input),
        )

        outcome = await execute_tool(self.runner, descriptor, generated.generated_input)
        if not outcome.failed:
            logger.info("[%s] tool execution result: %s", invocation_id, _pretty(outcome.result))

        return reconcile(
            outcome,
            reasoning=generated.reasoning,
            tool_name=descriptor.name,
            generated_input=generated.generated_input,
        )
