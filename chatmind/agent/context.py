"""
Context Assembly
================

Builds the outbound request for one turn.

Every request has the same shape:

    [system prompt] + [history, oldest first] + [new user message]

The system prompt is added fresh on every call; it is never stored in the
history and so is never evicted. Tools are attached only when the agent
has at least one capability, otherwise tool calling stays disabled.
"""

from dataclasses import dataclass, field
from typing import Sequence

from chatmind.memory import ConversationHistory, Message
from chatmind.tools import Capability
from chatmind.utils.logger import Logger

logger = Logger("Context")


@dataclass(frozen=True)
class AssembledContext:
    """
    The fully assembled request for the gateway.

    Attributes:
        messages: System prompt, history snapshot and the user message
        tools: Capabilities to advertise (empty means no tool calling)
    """
    messages: tuple[Message, ...]
    tools: tuple[Capability, ...] = field(default_factory=tuple)

    @property
    def user_message(self) -> Message:
        return self.messages[-1]

    def tools_or_none(self) -> list[Capability] | None:
        """The tool list to pass to the gateway: None when there are no tools."""
        return list(self.tools) if self.tools else None


class ContextAssembler:
    """
    Assembles per-turn requests for an agent.

    Example:
        assembler = ContextAssembler("You are helpful.", capabilities)
        context = assembler.assemble(history, "What city am I in?")

        completion = gateway.complete(context.messages, tools=context.tools_or_none())
    """

    def __init__(self, system_prompt: str, capabilities: Sequence[Capability] = ()):
        self.system_prompt = system_prompt
        self.capabilities = tuple(capabilities)

    def assemble(self, history: ConversationHistory, user_input: str) -> AssembledContext:
        """
        Assemble the request for a turn.

        Reads the history but does not modify it.

        Args:
            history: The agent's conversation history
            user_input: The new user message

        Returns:
            AssembledContext ready for the gateway
        """
        messages = (
            Message.system(self.system_prompt),
            *history.snapshot(),
            Message.user(user_input),
        )

        logger.debug(
            f"Assembled {len(messages)} messages "
            f"({len(history)} from history, {len(self.capabilities)} tools)"
        )

        return AssembledContext(messages=messages, tools=self.capabilities)
