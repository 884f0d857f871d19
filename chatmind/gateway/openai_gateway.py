"""
OpenAI Gateway
==============

ModelGateway backed by the OpenAI chat completions API (or any
OpenAI-compatible endpoint via base_url).

Request Loop:
    Outbound messages (+ tool definitions if any)
         │
         ▼
    chat.completions.create
         │
    ┌─── Has Tool Calls? ───┐
    │                       │
    Yes                     No
    │                       │
    ▼                       ▼
    Execute Tools      Return content
    │
    ▼
    Append assistant + tool messages
    │
    └──── call again (at most max_tool_iterations rounds)

Tool messages exist only inside this loop; the caller gets back the
final content and nothing else.
"""

from typing import Any, Sequence

import httpx
from openai import OpenAI, OpenAIError

from chatmind.agent.tools_executor import ToolExecutor
from chatmind.errors import GatewayError
from chatmind.gateway.base import Completion
from chatmind.memory import Message
from chatmind.tools import Capability, ToolRegistry
from chatmind.utils.config import OpenAIConfig
from chatmind.utils.logger import Logger

logger = Logger("Gateway")
tool_loop_logger = logger.child("ToolLoop")


class OpenAIGateway:
    """
    Completes conversations with OpenAI, resolving tool calls on the way.

    Example:
        registry = register_builtin_tools(ToolRegistry())
        gateway = OpenAIGateway.from_config(get_config().openai, registry)

        completion = gateway.complete(
            [Message.system("Be brief."), Message.user("Where am I?")],
            tools=registry.capabilities(),
        )
        print(completion.content)
    """

    def __init__(
        self,
        client: OpenAI,
        model: str,
        registry: ToolRegistry | None = None,
        max_tool_iterations: int = 10
    ):
        """
        Initialize the gateway.

        Args:
            client: A configured OpenAI client
            model: Chat model name
            registry: Tools that can be executed when the model asks
            max_tool_iterations: Upper bound on tool rounds per completion
        """
        self.client = client
        self.model = model
        self.registry = registry if registry is not None else ToolRegistry()
        self.max_tool_iterations = max_tool_iterations
        self.tool_executor = ToolExecutor(self.registry)

    @classmethod
    def from_config(
        cls,
        config: OpenAIConfig,
        registry: ToolRegistry | None = None
    ) -> "OpenAIGateway":
        """Build a gateway and its OpenAI client from configuration."""
        client = OpenAI(
            api_key=config.api_key,
            base_url=config.base_url,
            timeout=httpx.Timeout(config.timeout_seconds),
        )
        logger.info(f"OpenAI gateway using model: {config.model}")
        return cls(
            client=client,
            model=config.model,
            registry=registry,
            max_tool_iterations=config.max_tool_iterations,
        )

    def complete(
        self,
        messages: Sequence[Message],
        tools: Sequence[Capability] | None = None
    ) -> Completion:
        """
        Run one completion, including any tool-resolution rounds.

        Args:
            messages: Outbound messages, system prompt first
            tools: Capabilities to advertise; None or empty disables tools

        Returns:
            Completion with the final content

        Raises:
            GatewayError: If the OpenAI API call fails
        """
        payload = [message.to_dict() for message in messages]
        functions = [self.registry.openai_function(c) for c in tools] if tools else None

        logger.debug(
            f"Requesting completion ({len(payload)} messages, "
            f"{len(functions) if functions else 0} tools)"
        )

        try:
            reply = self._create(payload, functions)

            iterations = 0
            calls_made = 0
            while functions and reply.tool_calls and iterations < self.max_tool_iterations:
                iterations += 1
                tool_loop_logger.debug(f"Iteration {iterations}")

                tool_calls = self.tool_executor.parse_tool_calls(reply)
                results = self.tool_executor.execute_all(tool_calls)
                calls_made += len(results)

                payload.append(reply.model_dump(exclude_none=True))
                for result in results:
                    payload.append(result.to_openai_message())

                reply = self._create(payload, functions)

        except OpenAIError as e:
            logger.error("Model request failed", e)
            raise GatewayError(f"Model request failed: {e}", cause=e) from e

        if functions and reply.tool_calls:
            tool_loop_logger.warning("Reached max tool iterations with tool calls pending")

        return Completion(content=reply.content, tool_calls_made=calls_made)

    def _create(self, payload: list[dict], functions: list[dict] | None) -> Any:
        """Issue one chat completion request and return its first message."""
        kwargs: dict[str, Any] = {"model": self.model, "messages": payload}
        if functions:
            kwargs["tools"] = functions
            kwargs["tool_choice"] = "auto"

        response = self.client.chat.completions.create(**kwargs)
        if not response.choices:
            raise GatewayError("Model returned no choices")
        return response.choices[0].message
