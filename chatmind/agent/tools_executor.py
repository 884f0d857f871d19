"""
Tool Executor
=============

Runs the tools a model asks for during a single completion.

Tool Execution Loop (driven by the gateway):
    1. Model responds with tool calls
    2. Executor runs each one against the registry
    3. Results go back to the model as "tool" messages
    4. Model continues (and may call more tools)
    5. Repeat until the model produces plain content

The Agent never sees this loop; it only receives the final text.
"""

import json
from dataclasses import dataclass
from typing import Any

from chatmind.tools import ToolRegistry, ToolResult
from chatmind.utils.logger import Logger

logger = Logger("ToolExecutor")


@dataclass
class ToolCall:
    """
    A parsed tool call from the model.

    Attributes:
        id: The tool call ID (for matching results)
        name: The tool name
        arguments: Parsed arguments dict
    """
    id: str
    name: str
    arguments: dict[str, Any]


@dataclass
class ToolCallResult:
    """
    Result of executing a tool call.

    Attributes:
        tool_call_id: The original tool call ID
        name: The tool name
        result: The tool result
    """
    tool_call_id: str
    name: str
    result: ToolResult

    def to_openai_message(self) -> dict:
        """Format as a tool result message for OpenAI."""
        return {
            "role": "tool",
            "tool_call_id": self.tool_call_id,
            "content": self.result.to_message()
        }


class ToolExecutor:
    """
    Executes tools called by the model.

    Example:
        executor = ToolExecutor(registry)

        tool_calls = executor.parse_tool_calls(response.choices[0].message)
        for result in executor.execute_all(tool_calls):
            messages.append(result.to_openai_message())
    """

    def __init__(self, registry: ToolRegistry):
        self.registry = registry

    def parse_tool_calls(self, message: Any) -> list[ToolCall]:
        """
        Parse tool calls from an OpenAI assistant message.

        Arguments that are not valid JSON (or not a JSON object) are
        replaced with an empty dict so the tool still gets a chance to run
        and report its own error.

        Args:
            message: The `choices[0].message` of a chat completion

        Returns:
            List of parsed ToolCall objects
        """
        if not message.tool_calls:
            return []

        tool_calls = []
        for tc in message.tool_calls:
            try:
                arguments = json.loads(tc.function.arguments or "{}")
            except json.JSONDecodeError as e:
                logger.warning(f"Failed to parse arguments for {tc.function.name}: {e}")
                arguments = {}

            if not isinstance(arguments, dict):
                arguments = {}

            tool_calls.append(ToolCall(
                id=tc.id,
                name=tc.function.name,
                arguments=arguments
            ))

        logger.debug(f"Parsed {len(tool_calls)} tool calls")
        return tool_calls

    def execute_one(self, tool_call: ToolCall) -> ToolCallResult:
        """Execute a single tool call through the registry."""
        result = self.registry.execute(tool_call.name, tool_call.arguments)

        if result.success:
            logger.debug(f"Tool {tool_call.name} succeeded")
        else:
            logger.warning(f"Tool {tool_call.name} failed: {result.error}")

        return ToolCallResult(
            tool_call_id=tool_call.id,
            name=tool_call.name,
            result=result
        )

    def execute_all(self, tool_calls: list[ToolCall]) -> list[ToolCallResult]:
        """
        Execute tool calls sequentially.

        Returns:
            Results in the same order as the calls
        """
        return [self.execute_one(tool_call) for tool_call in tool_calls]
