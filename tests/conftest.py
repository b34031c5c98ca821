"""
Shared fakes for the tool-synthesis pipeline.

Neither fake talks to a network: FakeGenerator returns canned replies and
FakeRunner returns canned reports (or raises), recording every call so
tests can assert how often the execution capability was reached.
"""

import copy
from typing import Any, Optional

import pytest

from core.models import GenerationRequest, ToolDescriptor

LIST_CODE = "export default async function (input, ctx) { return {todos:[]} }"


def make_reply(**overrides: Any) -> dict[str, Any]:
    reply = {
        "toolName": "LIST",
        "toolDescription": "d",
        "inputSchema": {},
        "outputSchema": {},
        "executeCode": LIST_CODE,
        "input": {},
        "reasoning": "r",
    }
    reply.update(overrides)
    return reply


class FakeGenerator:
    def __init__(self, reply: Any = None, error: Optional[BaseException] = None):
        self.reply = make_reply() if reply is None else reply
        self.error = error
        self.requests: list[GenerationRequest] = []

    async def generate(self, request: GenerationRequest) -> Any:
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        return copy.deepcopy(self.reply)


class FakeRunner:
    def __init__(self, report: Any = None, error: Optional[BaseException] = None):
        self.report = {"result": {"todos": []}} if report is None else report
        self.error = error
        self.calls: list[tuple[ToolDescriptor, Any]] = []

    async def run_tool(self, descriptor: ToolDescriptor, tool_input: Any) -> Any:
        self.calls.append((descriptor, tool_input))
        if self.error is not None:
            raise self.error
        return copy.deepcopy(self.report)


@pytest.fixture
def generator() -> FakeGenerator:
    return FakeGenerator()


@pytest.fixture
def runner() -> FakeRunner:
    return FakeRunner()
