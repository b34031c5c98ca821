from core.catalog import CAPABILITY_CATALOG
from core.models import CapabilityDescriptor
from core.prompt import (
    REQUIRED_CODE_PREFIX,
    SYSTEM_INSTRUCTION,
    TOOL_GENERATION_SCHEMA,
    compose_generation_request,
    render_catalog,
)
from core.validation import has_entry_point


def test_request_embeds_query_and_catalog():
    request = compose_generation_request("list todos", CAPABILITY_CATALOG)

    assert 'User request: "list todos"' in request.user_instruction
    for capability in CAPABILITY_CATALOG:
        assert f"ctx.env.SELF.{capability.id}(" in request.user_instruction


def test_code_shape_contract_is_stated_redundantly():
    text = compose_generation_request("anything", CAPABILITY_CATALOG).user_instruction

    # format block + "MUST start with" + two worked examples
    assert text.count(REQUIRED_CODE_PREFIX) >= 4
    assert f'MUST start with "{REQUIRED_CODE_PREFIX}"' in text
    assert 'MUST end with "}"' in text
    assert "Example for listing todos" in text
    assert "Example for creating a todo" in text


def test_worked_examples_pass_the_entry_point_check():
    text = compose_generation_request("anything", CAPABILITY_CATALOG).user_instruction
    blocks = text.split("```javascript\n")[1:]

    assert len(blocks) == 3
    for block in blocks:
        code = block.split("```", 1)[0]
        assert has_entry_point(code)


def test_request_defaults():
    request = compose_generation_request("q", CAPABILITY_CATALOG)

    assert request.temperature == 0.3
    assert request.model is None
    assert request.system_instruction == SYSTEM_INSTRUCTION
    assert request.reply_schema is TOOL_GENERATION_SCHEMA
    assert [m["role"] for m in request.messages()] == ["system", "user"]


def test_reply_schema_requires_every_field():
    assert set(TOOL_GENERATION_SCHEMA["required"]) == {
        "toolName",
        "toolDescription",
        "inputSchema",
        "outputSchema",
        "executeCode",
        "input",
        "reasoning",
    }
    assert set(TOOL_GENERATION_SCHEMA["properties"]) == set(TOOL_GENERATION_SCHEMA["required"])


def test_render_catalog_one_line_per_capability():
    catalog = (
        CapabilityDescriptor(id="PING", signature="{}", description="Ping the host"),
        CapabilityDescriptor(id="ECHO", signature="{ text: string }", description="Echo text"),
    )

    assert render_catalog(catalog) == (
        "- ctx.env.SELF.PING({}) - Ping the host\n"
        "- ctx.env.SELF.ECHO({ text: string }) - Echo text"
    )


def test_overrides_are_carried():
    request = compose_generation_request("q", (), temperature=0.0, model="openai/gpt-4o-mini")

    assert request.temperature == 0.0
    assert request.model == "openai/gpt-4o-mini"
    assert "You have access to these tools via ctx.env.SELF:\n\n" in request.user_instruction
