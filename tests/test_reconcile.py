from core.models import ExecutionOutcome, ToolInvocationRecord
from core.reconcile import dynamic_tool_uri, reconcile


def test_success_sets_result_only():
    record = reconcile(ExecutionOutcome.success({"todos": []}), "r", "LIST", {})

    assert record == ToolInvocationRecord(
        reasoning="r",
        tool_uri="DYNAMIC::LIST",
        generated_input={},
        result={"todos": []},
        error=None,
    )


def test_failure_sets_error_only():
    record = reconcile(ExecutionOutcome.failure("boom"), "why", "DELETE", {"id": 1})

    assert record.error == "boom"
    assert record.result is None
    assert record.reasoning == "why"
    assert record.tool_uri == "DYNAMIC::DELETE"
    assert record.generated_input == {"id": 1}


def test_tool_uri_is_plain_concatenation():
    assert dynamic_tool_uri("List Todos!") == "DYNAMIC::List Todos!"


def test_to_dict_uses_caller_keys_and_omits_absent_fields():
    ok = reconcile(ExecutionOutcome.success({"n": 1}), "r", "T", {"a": 1}).to_dict()
    failed = reconcile(ExecutionOutcome.failure("nope"), "r", "T", {}).to_dict()

    assert ok == {"reasoning": "r", "toolUri": "DYNAMIC::T", "generatedInput": {"a": 1}, "result": {"n": 1}}
    assert failed == {"reasoning": "r", "toolUri": "DYNAMIC::T", "generatedInput": {}, "error": "nope"}
