import pytest

from chatmind.errors import ConfigurationError, DuplicateCapabilityError
from chatmind.tools import (
    Capability,
    Tool,
    ToolKind,
    ToolRegistry,
    ToolResult,
    ensure_unique_names,
    to_openai_function,
)
from chatmind.tools.builtin import BUILTIN_TOOLS, register_builtin_tools


def make_tool(name, kind=ToolKind.FIXED, execute=None, parameters=None):
    return Tool(
        capability=Capability(name, f"{name} description", kind),
        execute=execute or (lambda params: ToolResult(success=True, data=params)),
        parameters=parameters,
    )


def test_register_and_lookup():
    registry = ToolRegistry()
    tool = make_tool("echo")
    registry.register(tool)

    assert registry.get("echo") is tool
    assert registry.list_names() == ["echo"]
    assert "echo" in registry
    assert len(registry) == 1
    assert registry.get("missing") is None


def test_register_rejects_duplicates():
    registry = ToolRegistry()
    registry.register(make_tool("echo"))

    with pytest.raises(DuplicateCapabilityError) as excinfo:
        registry.register(make_tool("echo", ToolKind.DYNAMIC))

    assert excinfo.value.name == "echo"
    assert isinstance(excinfo.value, ConfigurationError)


def test_capabilities_includes_fixed_and_selected_dynamic():
    registry = ToolRegistry()
    registry.register(make_tool("fixed"))
    registry.register(make_tool("weather", ToolKind.DYNAMIC))
    registry.register(make_tool("stocks", ToolKind.DYNAMIC))

    assert [c.name for c in registry.capabilities()] == ["fixed"]

    selected = registry.capabilities(selector=lambda c: c.name == "weather")
    assert [c.name for c in selected] == ["fixed", "weather"]
    assert all(isinstance(c, Capability) for c in selected)


def test_execute_runs_tool():
    registry = ToolRegistry()
    registry.register(make_tool("echo"))

    result = registry.execute("echo", {"x": 1})

    assert result.success
    assert result.data == {"x": 1}


def test_execute_unknown_tool_reports_failure():
    result = ToolRegistry().execute("nope", {})

    assert not result.success
    assert "not found" in result.error


def test_execute_captures_tool_exception():
    def broken(params):
        raise RuntimeError("kaput")

    registry = ToolRegistry()
    registry.register(make_tool("broken", execute=broken))

    result = registry.execute("broken", {})

    assert not result.success
    assert result.error == "kaput"
    assert result.to_message() == "Error: kaput"


def test_tool_result_message_is_json():
    assert ToolResult(success=True, data={"city": "Shenzhen"}).to_message() == '{"city": "Shenzhen"}'


def test_ensure_unique_names():
    ensure_unique_names([Capability("a", ""), Capability("b", "")])

    with pytest.raises(DuplicateCapabilityError):
        ensure_unique_names([Capability("a", ""), Capability("b", ""), Capability("a", "")])


def test_openai_function_uses_registered_schema():
    schema = {"type": "object", "properties": {"q": {"type": "string"}}, "required": ["q"]}
    registry = ToolRegistry()
    tool = make_tool("search", parameters=schema)
    registry.register(tool)

    function = registry.openai_function(tool.capability)

    assert function == {
        "type": "function",
        "function": {"name": "search", "description": "search description", "parameters": schema},
    }


def test_openai_function_for_unregistered_capability_has_empty_schema():
    function = to_openai_function(Capability("getCity", "Get the current city."))

    assert function["function"]["parameters"] == {"type": "object", "properties": {}}


def test_builtin_tools():
    registry = register_builtin_tools(ToolRegistry())

    assert registry.list_names() == [tool.name for tool in BUILTIN_TOOLS]
    assert all(c.kind is ToolKind.FIXED for c in registry.capabilities())
    assert registry.execute("getCity", {}).data == {"city": "Shenzhen"}
