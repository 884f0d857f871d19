"""Gateway contract shared by the Agent and gateway implementations."""

from dataclasses import dataclass
from typing import Protocol, Sequence, runtime_checkable

from chatmind.memory import Message
from chatmind.tools import Capability


@dataclass(frozen=True)
class Completion:
    """
    Result of a gateway call.

    Attributes:
        content: Final assistant text, or None
        tool_calls_made: Number of tool calls resolved along the way
    """
    content: str | None
    tool_calls_made: int = 0


@runtime_checkable
class ModelGateway(Protocol):
    """Anything that can turn a message list into a completion."""

    def complete(
        self,
        messages: Sequence[Message],
        tools: Sequence[Capability] | None = None
    ) -> Completion:
        ...
