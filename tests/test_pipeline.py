import asyncio

import pytest

from conftest import FakeGenerator, FakeRunner, make_reply
from core.catalog import CAPABILITY_CATALOG
from core.errors import CodeFormatError, MissingFieldError
from core.models import ToolInvocationRecord
from core.pipeline import ToolSynthesisPipeline
from core.prompt import REQUIRED_CODE_PREFIX, TOOL_GENERATION_SCHEMA


def run(pipeline, query="list todos"):
    return asyncio.run(pipeline.run(query))


def test_scenario_a_list_todos(generator, runner):
    record = run(ToolSynthesisPipeline(generator, runner))

    assert record == ToolInvocationRecord(
        reasoning="r",
        tool_uri="DYNAMIC::LIST",
        generated_input={},
        result={"todos": []},
        error=None,
    )
    assert len(runner.calls) == 1
    descriptor, tool_input = runner.calls[0]
    assert descriptor.code == make_reply()["executeCode"]
    assert tool_input == {}


def test_generation_request_is_composed_from_query_and_catalog(generator, runner):
    run(ToolSynthesisPipeline(generator, runner, temperature=0.1, model="m"), "toggle todo 3")

    (request,) = generator.requests
    assert 'User request: "toggle todo 3"' in request.user_instruction
    assert all(c.id in request.user_instruction for c in CAPABILITY_CATALOG)
    assert request.reply_schema == TOOL_GENERATION_SCHEMA
    assert request.temperature == 0.1
    assert request.model == "m"


def test_scenario_b_bad_code_aborts_without_execution(runner):
    generator = FakeGenerator(make_reply(executeCode="function foo(){}"))

    with pytest.raises(CodeFormatError) as excinfo:
        run(ToolSynthesisPipeline(generator, runner))

    assert REQUIRED_CODE_PREFIX in str(excinfo.value)
    assert runner.calls == []


@pytest.mark.parametrize("field", ["toolName", "executeCode"])
def test_missing_fields_never_reach_the_runner(field, runner):
    reply = make_reply()
    del reply[field]

    with pytest.raises(MissingFieldError):
        run(ToolSynthesisPipeline(FakeGenerator(reply), runner))

    assert runner.calls == []


def test_scenario_c_runner_exception_is_returned_not_raised(generator):
    runner = FakeRunner(error=ConnectionError("network down"))

    record = run(ToolSynthesisPipeline(generator, runner))

    assert record.error == "network down"
    assert record.result is None
    assert record.reasoning == "r"
    assert record.tool_uri == "DYNAMIC::LIST"


def test_reported_error_is_returned(generator):
    runner = FakeRunner(report={"error": {"message": "Todo not found"}})

    record = run(ToolSynthesisPipeline(generator, runner))

    assert record.result is None
    assert record.error == '{"message": "Todo not found"}'


def test_scenario_d_missing_schemas_still_execute(runner):
    reply = make_reply()
    del reply["inputSchema"]
    del reply["outputSchema"]

    record = run(ToolSynthesisPipeline(FakeGenerator(reply), runner))

    descriptor, _ = runner.calls[0]
    assert descriptor.input_schema == {}
    assert descriptor.output_schema == {}
    assert record.result == {"todos": []}


def test_generated_input_is_passed_through(runner):
    reply = make_reply(
        toolName="TOGGLE",
        executeCode="export default async function (input, ctx) { return await ctx.env.SELF.TOGGLE_TODO({ id: input.id }) }",
        inputSchema={"type": "object", "properties": {"id": {"type": "string"}}},
        input={"id": 3},
    )

    record = run(ToolSynthesisPipeline(FakeGenerator(reply), runner))

    assert runner.calls[0][1] == {"id": 3}
    assert record.generated_input == {"id": 3}
    assert record.tool_uri == "DYNAMIC::TOGGLE"


def test_transport_failure_propagates(runner):
    generator = FakeGenerator(error=TimeoutError("backend timed out"))

    with pytest.raises(TimeoutError, match="backend timed out"):
        run(ToolSynthesisPipeline(generator, runner))

    assert runner.calls == []


def test_repeated_calls_are_deterministic(generator, runner):
    pipeline = ToolSynthesisPipeline(generator, runner)

    first = run(pipeline)
    second = run(pipeline)

    assert first == second
    assert generator.requests[0] == generator.requests[1]


def test_cancellation_reaches_the_in_flight_call(generator):
    started = asyncio.Event()

    class SlowRunner:
        cancelled = False

        async def run_tool(self, descriptor, tool_input):
            started.set()
            try:
                await asyncio.sleep(30)
            except asyncio.CancelledError:
                SlowRunner.cancelled = True
                raise
            return {"result": None}

    async def scenario():
        task = asyncio.create_task(ToolSynthesisPipeline(generator, SlowRunner()).run("q"))
        await started.wait()
        task.cancel()
        with pytest.raises(asyncio.CancelledError):
            await task

    asyncio.run(scenario())
    assert SlowRunner.cancelled
