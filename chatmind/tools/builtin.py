"""
Built-in Tools
==============

Small always-available tools used by the command-line agent.

- getCity: reports the city the assistant is running in
- directAnswer: lets the model signal that no action is needed and it
  will answer in plain text
"""

from chatmind.tools import Capability, Tool, ToolKind, ToolRegistry, ToolResult
from chatmind.utils.logger import Logger

logger = Logger("BuiltinTools")

DEFAULT_CITY = "Shenzhen"


def get_city(params: dict) -> ToolResult:
    """Return the current city."""
    return ToolResult(success=True, data={"city": DEFAULT_CITY})


def direct_answer(params: dict) -> ToolResult:
    # Marker tool: the model answers in its next message
    return ToolResult(success=True, data={"status": "answer directly"})


GET_CITY = Tool(
    capability=Capability(
        name="getCity",
        description="Get the current city.",
        kind=ToolKind.FIXED,
    ),
    execute=get_city,
)

DIRECT_ANSWER = Tool(
    capability=Capability(
        name="directAnswer",
        description=(
            "Call this when the request needs no action, "
            "then answer the user directly in natural language."
        ),
        kind=ToolKind.FIXED,
    ),
    execute=direct_answer,
)

BUILTIN_TOOLS = (GET_CITY, DIRECT_ANSWER)


def register_builtin_tools(registry: ToolRegistry) -> ToolRegistry:
    """
    Register every built-in tool with a registry.

    Returns:
        The same registry, for chaining
    """
    for tool in BUILTIN_TOOLS:
        registry.register(tool)

    logger.info(f"Registered {len(BUILTIN_TOOLS)} built-in tools")
    return registry
