from chatmind.agent.tools_executor import ToolCall, ToolExecutor
from chatmind.tools import Capability, Tool, ToolRegistry, ToolResult

from fakes import FakeMessage, tool_call


def make_executor():
    registry = ToolRegistry()
    registry.register(Tool(
        capability=Capability("add", "Add two numbers."),
        execute=lambda p: ToolResult(success=True, data=p.get("a", 0) + p.get("b", 0)),
    ))
    return ToolExecutor(registry)


def test_parse_tool_calls():
    message = FakeMessage(tool_calls=[tool_call("c1", "add", '{"a": 1, "b": 2}')])

    calls = make_executor().parse_tool_calls(message)

    assert calls == [ToolCall(id="c1", name="add", arguments={"a": 1, "b": 2})]


def test_parse_no_tool_calls():
    assert make_executor().parse_tool_calls(FakeMessage(content="hi")) == []


def test_invalid_arguments_become_empty_dict():
    message = FakeMessage(tool_calls=[
        tool_call("c1", "add", "{not json"),
        tool_call("c2", "add", "[1, 2]"),
        tool_call("c3", "add", ""),
    ])

    calls = make_executor().parse_tool_calls(message)

    assert [c.arguments for c in calls] == [{}, {}, {}]


def test_execute_all_preserves_order_and_formats_messages():
    executor = make_executor()
    calls = [
        ToolCall(id="c1", name="add", arguments={"a": 1, "b": 2}),
        ToolCall(id="c2", name="missing", arguments={}),
    ]

    results = executor.execute_all(calls)

    assert [r.tool_call_id for r in results] == ["c1", "c2"]
    assert results[0].to_openai_message() == {"role": "tool", "tool_call_id": "c1", "content": "3"}
    assert results[1].to_openai_message()["content"] == "Error: Tool 'missing' not found"
