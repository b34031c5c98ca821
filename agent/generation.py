# =============================================================================
# agent/generation.py  -  The Generation Client (LiteLLM)
# =============================================================================
#
# WHAT THIS FILE DOES:
#   Sends a GenerationRequest to a generative backend and returns the raw,
#   untrusted reply object.  Nothing here validates the reply's fields;
#   that is core/validation.py's job.
#
# WHY LITELLM:
#   The chat front end already reaches its model through LiteLlm (see
#   agent/assistant.py).  Using litellm directly here keeps ONE model layer:
#   any "provider/model" string LiteLLM understands works for both.
#
# STRUCTURED OUTPUT:
#   The reply schema is passed as an OpenAI-style `response_format` of type
#   `json_schema`.  LiteLLM translates it for providers that use a different
#   mechanism.
#
# FAILURE POLICY:
#   Transport/backend errors from litellm are NOT caught or retried.  They
#   propagate unchanged to whoever called the pipeline.
# =============================================================================

import json
import logging
from typing import Any

import litellm

from core.errors import GenerationError
from core.models import GenerationRequest

logger = logging.getLogger(__name__)

DEFAULT_GENERATION_MODEL = "openai/gpt-4.1-mini"


def _message_content(response: Any) -> Any:
    choices = getattr(response, "choices", None) or []
    if not choices:
        raise GenerationError("Generation backend returned no choices")
    message = getattr(choices[0], "message", None)
    return getattr(message, "content", None)


def parse_reply(content: Any) -> dict[str, Any]:
    """Decode the backend's message content into a JSON object."""
    if isinstance(content, dict):
        return content
    if not isinstance(content, str) or not content.strip():
        raise GenerationError("Generation backend returned an empty reply")

    text = content.strip()
    # Some providers wrap JSON mode output in a markdown fence anyway.
    if text.startswith("```"):
        text = text.split("\n", 1)[1] if "\n" in text else ""
        if text.rstrip().endswith("```"):
            text = text.rstrip()[:-3]

    try:
        parsed = json.loads(text)
    except json.JSONDecodeError as exc:
        raise GenerationError(f"Generation backend returned invalid JSON: {exc}") from exc
    if not isinstance(parsed, dict):
        raise GenerationError("Generation backend reply is not a JSON object")
    return parsed


class LiteLlmGenerationClient:
    """GenerationClient backed by litellm.acompletion."""

    def __init__(self, model: str = DEFAULT_GENERATION_MODEL, **completion_kwargs: Any):
        self.model = model
        self.completion_kwargs = completion_kwargs

    async def generate(self, request: GenerationRequest) -> dict[str, Any]:
        model = request.model or self.model
        response = await litellm.acompletion(
            model=model,
            messages=request.messages(),
            temperature=request.temperature,
            response_format={
                "type": "json_schema",
                "json_schema": {
                    "name": "tool_generation",
                    "schema": request.reply_schema,
                },
            },
            **self.completion_kwargs,
        )
        reply = parse_reply(_message_content(response))
        logger.debug("generation reply from %s with keys %s", model, sorted(reply))
        return reply
