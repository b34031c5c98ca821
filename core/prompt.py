# =============================================================================
# core/prompt.py  -  The Prompt Composer
# =============================================================================
#
# WHAT THIS FILE DOES:
#   Turns a free-text query plus the capability catalog into a
#   GenerationRequest: system message, user message, temperature, and the
#   JSON schema the reply must follow.
#
# THE CODE-SHAPE CONTRACT IS STATED THREE TIMES:
#   1. As an instruction ("The executeCode MUST follow this exact format")
#   2. As a MUST start with / MUST end with checklist
#   3. As two literal worked examples
#
#   core/validation.py performs an exact structural check on the returned
#   code.  A single stated rule is not enough to make a probabilistic
#   backend hit that check reliably; repeating it is.
#
# THE CATALOG IS RENDERED AS ONE LINE PER CAPABILITY:
#   `- ctx.env.SELF.<ID>(<signature>) - <description>`
#   so the generated code only references capabilities that exist.
#
# Pure construction: no I/O, no errors.
# =============================================================================

from typing import Any, Iterable

from core.models import CapabilityDescriptor, GenerationRequest


# The literal entry point every executeCode must declare.
REQUIRED_CODE_PREFIX = "export default async function (input, ctx) {"

DEFAULT_TEMPERATURE = 0.3

SYSTEM_INSTRUCTION = (
    "You are a helpful assistant that generates executable JavaScript code "
    "for tools. Always provide valid, executable code."
)

# Every field is required so the backend cannot "forget" one; the validator
# still tolerates missing ones, since backends do not always obey.
TOOL_GENERATION_SCHEMA: dict[str, Any] = {
    "type": "object",
    "properties": {
        "toolName": {
            "type": "string",
            "description": "A descriptive name for the generated tool",
        },
        "toolDescription": {
            "type": "string",
            "description": "Description of what the tool does",
        },
        "inputSchema": {
            "type": "object",
            "description": "JSON schema for the tool input",
        },
        "outputSchema": {
            "type": "object",
            "description": "JSON schema for the tool output",
        },
        "executeCode": {
            "type": "string",
            "description": (
                "ES module code with default export function. MUST be in format: "
                f"'{REQUIRED_CODE_PREFIX} /* code */ }}'. The function receives "
                "(input, ctx) where ctx.env.SELF provides access to tools."
            ),
        },
        "input": {
            "type": "object",
            "description": "The input parameters to pass to the tool",
            "additionalProperties": True,
        },
        "reasoning": {
            "type": "string",
            "description": "Brief explanation of what you're doing and why",
        },
    },
    "required": [
        "toolName",
        "toolDescription",
        "inputSchema",
        "outputSchema",
        "executeCode",
        "input",
        "reasoning",
    ],
}

_LIST_EXAMPLE = f"""{REQUIRED_CODE_PREFIX}
  const result = await ctx.env.SELF.LIST_TODOS({{}});
  return {{ todos: result.todos }};
}}"""

_CREATE_EXAMPLE = f"""{REQUIRED_CODE_PREFIX}
  const result = await ctx.env.SELF.GENERATE_TODO_WITH_AI({{ prompt: input.prompt }});
  return {{ todo: result.todo }};
}}"""


def render_catalog(catalog: Iterable[CapabilityDescriptor]) -> str:
    """One line per capability, in catalog order."""
    return "\n".join(
        f"- ctx.env.SELF.{c.id}({c.signature}) - {c.description}"
        for c in catalog
    )


def build_user_instruction(query: str, catalog: Iterable[CapabilityDescriptor]) -> str:
    return f"""You are a tool code generator. Based on the user's request, generate JavaScript code that will accomplish the task.

User request: "{query}"

You have access to these tools via ctx.env.SELF:
{render_catalog(catalog)}

Generate a tool that:
1. Has a descriptive name and description
2. Defines appropriate input/output JSON schemas
3. Contains an ES module with a default export function

The executeCode MUST follow this exact format:
```javascript
{_LIST_EXAMPLE}
```

CRITICAL Requirements for executeCode:
- MUST start with "{REQUIRED_CODE_PREFIX}"
- MUST end with "}}"
- The 'input' parameter contains the input data based on inputSchema
- The 'ctx.env.SELF' object provides access to our tools
- Use async/await for all tool calls
- Return a JSON object matching the outputSchema
- Handle errors gracefully with try/catch if needed

Example for listing todos:
```javascript
{_LIST_EXAMPLE}
```

Example for creating a todo:
```javascript
{_CREATE_EXAMPLE}
```

Return a JSON with: toolName, toolDescription, inputSchema, outputSchema, executeCode (as a complete ES module string), input (the data to pass when executing), and reasoning."""


def compose_generation_request(
    query: str,
    catalog: Iterable[CapabilityDescriptor],
    temperature: float = DEFAULT_TEMPERATURE,
    model: str | None = None,
) -> GenerationRequest:
    """Build the generation request for one query.

    Args:
        query: The user's natural-language intent, embedded verbatim.
        catalog: The capabilities the generated code may reference.
        temperature: Kept low so the backend favors the literal examples.
        model: Optional backend model override.

    Returns:
        A fresh GenerationRequest; callers may discard it after use.
    """
    return GenerationRequest(
        system_instruction=SYSTEM_INSTRUCTION,
        user_instruction=build_user_instruction(query, catalog),
        reply_schema=TOOL_GENERATION_SCHEMA,
        temperature=temperature,
        model=model,
    )
