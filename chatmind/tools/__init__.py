"""
Tools System
============

Capabilities are functions the model may ask to have invoked. This module
separates the two halves of a tool:

- Capability: the descriptor advertised to the model (name, description,
  kind). It carries no implementation and is what the Agent holds.
- Tool: a Capability plus its JSON parameter schema and the function
  that runs it. Tools live in a ToolRegistry and are executed by the
  model gateway's tool-resolution loop, never by the Agent.

Tool kinds:
    FIXED    always offered to the model
    DYNAMIC  offered only when an external selection policy picks it
             (retrieval, relevance filtering, ...)

Names must be unique within one advertised set; duplicates are rejected
with DuplicateCapabilityError.
"""

import json
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Iterable

from chatmind.errors import DuplicateCapabilityError
from chatmind.utils.logger import Logger

logger = Logger("Tools")


class ToolKind(str, Enum):
    """Closed set of capability kinds."""
    FIXED = "fixed"
    DYNAMIC = "dynamic"


@dataclass(frozen=True)
class Capability:
    """
    Descriptor of an invocable capability.

    Attributes:
        name: Identifier the model uses to request the call
        description: Natural-language description shown to the model
        kind: FIXED or DYNAMIC
    """
    name: str
    description: str
    kind: ToolKind = ToolKind.FIXED


@dataclass
class ToolResult:
    """
    Standardized result from tool execution.

    Attributes:
        success: Whether the tool executed successfully
        data: The result data (varies by tool)
        error: Error message if success is False
    """
    success: bool
    data: Any = None
    error: str | None = None

    def to_message(self) -> str:
        """Format as tool-message content for the LLM."""
        if self.success:
            return json.dumps(self.data, default=str)
        return f"Error: {self.error}"


EMPTY_PARAMETERS = {"type": "object", "properties": {}}


@dataclass
class Tool:
    """
    A capability together with its implementation.

    Example:
        def get_city(params: dict) -> ToolResult:
            return ToolResult(success=True, data={"city": "Shenzhen"})

        tool = Tool(
            capability=Capability("getCity", "Get the current city"),
            execute=get_city,
        )
    """
    capability: Capability
    execute: Callable[[dict], ToolResult]
    parameters: dict | None = None

    @property
    def name(self) -> str:
        return self.capability.name

    @property
    def description(self) -> str:
        return self.capability.description

    @property
    def kind(self) -> ToolKind:
        return self.capability.kind


def to_openai_function(capability: Capability, parameters: dict | None = None) -> dict:
    """
    Convert a capability to the OpenAI function-calling format.

    Args:
        capability: The descriptor to advertise
        parameters: JSON schema for the arguments; an empty object if None

    Returns:
        Dict in the format expected by the chat completions API
    """
    return {
        "type": "function",
        "function": {
            "name": capability.name,
            "description": capability.description,
            "parameters": parameters or EMPTY_PARAMETERS,
        }
    }


def ensure_unique_names(capabilities: Iterable[Capability]) -> None:
    """
    Reject a capability set in which two entries share a name.

    Raises:
        DuplicateCapabilityError: On the first repeated name
    """
    seen: set[str] = set()
    for capability in capabilities:
        if capability.name in seen:
            raise DuplicateCapabilityError(capability.name)
        seen.add(capability.name)


class ToolRegistry:
    """
    Registry of executable tools, looked up by name.

    Example:
        registry = ToolRegistry()
        registry.register(tool)

        # Descriptors to hand to an Agent
        capabilities = registry.capabilities()

        # Run a tool the model asked for
        result = registry.execute("getCity", {})
    """

    def __init__(self):
        self._tools: dict[str, Tool] = {}

    def register(self, tool: Tool) -> None:
        """
        Register a tool.

        Raises:
            DuplicateCapabilityError: If a tool with this name already exists
        """
        if tool.name in self._tools:
            raise DuplicateCapabilityError(tool.name)

        self._tools[tool.name] = tool
        logger.debug(f"Registered tool: {tool.name} ({tool.kind.value})")

    def get(self, name: str) -> Tool | None:
        return self._tools.get(name)

    def get_all(self) -> list[Tool]:
        return list(self._tools.values())

    def list_names(self) -> list[str]:
        return list(self._tools.keys())

    def capabilities(
        self,
        selector: Callable[[Capability], bool] | None = None
    ) -> list[Capability]:
        """
        Get descriptors for the tools to advertise.

        FIXED tools are always included. DYNAMIC tools are included only
        when a selector is given and accepts them.

        Args:
            selector: Selection policy for DYNAMIC tools

        Returns:
            Capabilities in registration order
        """
        selected = []
        for tool in self._tools.values():
            if tool.kind is ToolKind.FIXED:
                selected.append(tool.capability)
            elif selector is not None and selector(tool.capability):
                selected.append(tool.capability)
        return selected

    def openai_function(self, capability: Capability) -> dict:
        """OpenAI function definition for a capability, using the registered schema if any."""
        tool = self.get(capability.name)
        return to_openai_function(capability, tool.parameters if tool else None)

    def execute(self, name: str, params: dict) -> ToolResult:
        """
        Execute a tool by name.

        Unknown tools and exceptions raised by a tool are reported back as
        a failed ToolResult so the model can see what went wrong.
        """
        tool = self.get(name)
        if not tool:
            return ToolResult(success=False, error=f"Tool '{name}' not found")

        try:
            logger.info(f"Executing tool: {name}")
            return tool.execute(params)
        except Exception as e:
            logger.error(f"Tool execution failed: {name}", e)
            return ToolResult(success=False, error=str(e))

    def __len__(self) -> int:
        return len(self._tools)

    def __contains__(self, name: str) -> bool:
        return name in self._tools


__all__ = [
    "Capability",
    "ToolKind",
    "Tool",
    "ToolResult",
    "ToolRegistry",
    "ensure_unique_names",
    "to_openai_function",
]
