"""
Conversation History
====================

Bounded, in-memory conversation storage for a single agent.

- Holds the user/assistant messages of the current session
- Lives only in RAM (lost when the agent goes away)
- Capacity is a count of messages, not tokens
- Strict FIFO eviction: when an insert would exceed capacity the
  oldest message is dropped first, whatever its role

The system prompt is never stored here; the agent prepends it to each
request separately.
"""

from collections import deque
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Iterator

from chatmind.errors import ConfigurationError


class Role(str, Enum):
    """Who produced a message."""
    SYSTEM = "system"
    USER = "user"
    ASSISTANT = "assistant"
    TOOL = "tool"


@dataclass(frozen=True)
class Message:
    """
    A single role-tagged message. Immutable once created.

    Attributes:
        role: Who sent the message
        content: The message text
        timestamp: When the message was created (ignored for equality)
    """
    role: Role
    content: str
    timestamp: datetime = field(default_factory=datetime.now, compare=False)

    @classmethod
    def system(cls, content: str) -> "Message":
        return cls(Role.SYSTEM, content)

    @classmethod
    def user(cls, content: str) -> "Message":
        return cls(Role.USER, content)

    @classmethod
    def assistant(cls, content: str) -> "Message":
        return cls(Role.ASSISTANT, content)

    def to_dict(self) -> dict:
        """Convert to dictionary format for LLM API calls."""
        return {
            "role": self.role.value,
            "content": self.content,
        }


class ConversationHistory:
    """
    Ordered message buffer with a hard size limit.

    Backed by a deque with maxlen, so the bound is enforced by every
    append rather than by callers trimming afterwards.

    Example:
        history = ConversationHistory(max_messages=2)

        history.append(Message.user("hi"))
        history.append(Message.assistant("hello"))
        history.append(Message.user("bye"))   # evicts "hi"

        [m.content for m in history]  # ["hello", "bye"]
    """

    def __init__(self, max_messages: int):
        """
        Initialize an empty history.

        Args:
            max_messages: Maximum number of messages retained

        Raises:
            ConfigurationError: If max_messages is not a positive integer
        """
        if isinstance(max_messages, bool) or not isinstance(max_messages, int):
            raise ConfigurationError(
                f"max_messages must be an integer, got {type(max_messages).__name__}"
            )
        if max_messages <= 0:
            raise ConfigurationError(f"max_messages must be positive, got {max_messages}")

        self.max_messages = max_messages
        self._messages: deque[Message] = deque(maxlen=max_messages)

    def append(self, message: Message) -> Message | None:
        """
        Add a message, evicting the oldest one if the buffer is full.

        Args:
            message: The message to store

        Returns:
            The evicted message, or None if nothing was evicted
        """
        evicted = self._messages[0] if self.is_full() else None
        self._messages.append(message)
        return evicted

    def snapshot(self) -> tuple[Message, ...]:
        """Return the retained messages, oldest first, as an immutable tuple."""
        return tuple(self._messages)

    def is_full(self) -> bool:
        return len(self._messages) >= self.max_messages

    def __len__(self) -> int:
        return len(self._messages)

    def __iter__(self) -> Iterator[Message]:
        return iter(self.snapshot())

    def __repr__(self) -> str:
        return f"ConversationHistory(size={len(self)}, max_messages={self.max_messages})"
