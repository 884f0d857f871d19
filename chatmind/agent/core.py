"""
Agent Core
==========

A conversational agent with manually managed, size-bounded history.

Turn:
    user_input
         │
         ▼
    [System Prompt] + History + [User Message]
         │
         ▼
    Model Gateway (tools attached if the agent has any)
         │
         ▼
    Append user message (always)
    Append assistant message (only if content is non-empty)
         │
         ▼
    Return content

History is only touched after the gateway returns, so a failed call
leaves it exactly as it was and the same turn can simply be retried.

Thread safety: turns on one agent are serialized by a per-agent turn lock.
A separate history lock guards only the snapshot and the appends, so
get_history() never waits for a model call and a gateway may read the
history of the agent that called it.
Separate agents share nothing and never block each other.
"""

import threading
from dataclasses import dataclass, field

from chatmind.agent.context import ContextAssembler
from chatmind.errors import ConfigurationError
from chatmind.gateway.base import ModelGateway
from chatmind.memory import ConversationHistory, Message
from chatmind.tools import Capability, ensure_unique_names
from chatmind.utils.logger import Logger

logger = Logger("Agent")


@dataclass(frozen=True)
class AgentConfig:
    """
    Identity and policy of an agent.

    Attributes:
        id: Agent identifier
        name: Display name
        system_prompt: Prepended to every request, never stored in history
        memory_size: Maximum number of history messages
        session_id: Opaque correlation token (not interpreted)
        capabilities: Tools advertised to the model, may be empty
    """
    id: str
    name: str
    system_prompt: str
    memory_size: int
    session_id: str | None = None
    capabilities: tuple[Capability, ...] = field(default_factory=tuple)

    def __post_init__(self):
        if self.system_prompt is None:
            raise ConfigurationError("system_prompt is required")
        if not isinstance(self.system_prompt, str):
            raise ConfigurationError("system_prompt must be a string")
        if isinstance(self.memory_size, bool) or not isinstance(self.memory_size, int):
            raise ConfigurationError("memory_size must be an integer")
        if self.memory_size <= 0:
            raise ConfigurationError(f"memory_size must be positive, got {self.memory_size}")

        # Accept any iterable but store an immutable tuple
        object.__setattr__(self, "capabilities", tuple(self.capabilities or ()))
        ensure_unique_names(self.capabilities)


class Agent:
    """
    Turns user messages into model replies, remembering recent exchanges.

    Example:
        agent = Agent(
            id="agent-1",
            name="ChatMind",
            system_prompt="You are a helpful assistant.",
            gateway=gateway,
            memory_size=20,
            session_id="session-42",
            capabilities=registry.capabilities(),
        )

        reply = agent.chat("What city am I in?")
        for message in agent.get_history():
            print(message.role.value, message.content)
    """

    def __init__(
        self,
        id: str,
        name: str,
        system_prompt: str,
        gateway: ModelGateway,
        memory_size: int,
        session_id: str | None = None,
        capabilities: list[Capability] | None = None
    ):
        """
        Initialize the agent.

        Args:
            id: Agent identifier
            name: Display name
            system_prompt: System prompt sent with every request
            gateway: Model gateway used for completions
            memory_size: History capacity in messages (must be positive)
            session_id: Opaque session token
            capabilities: Tools to advertise; names must be unique

        Raises:
            ConfigurationError: If any parameter is invalid
            DuplicateCapabilityError: If two capabilities share a name
        """
        if gateway is None or not callable(getattr(gateway, "complete", None)):
            raise ConfigurationError("gateway must provide a complete() method")

        self.config = AgentConfig(
            id=id,
            name=name,
            system_prompt=system_prompt,
            memory_size=memory_size,
            session_id=session_id,
            capabilities=tuple(capabilities or ()),
        )
        self.gateway = gateway

        self._history = ConversationHistory(memory_size)
        # Turns run one at a time; history reads only wait for the brief appends
        self._turn_lock = threading.Lock()
        self._history_lock = threading.Lock()
        self.context_assembler = ContextAssembler(system_prompt, self.config.capabilities)

        logger.info(
            f"Agent '{name}' initialized",
            {
                "id": id,
                "session_id": session_id,
                "memory_size": memory_size,
                "tools": [c.name for c in self.config.capabilities],
            }
        )

    @classmethod
    def from_config(cls, config: AgentConfig, gateway: ModelGateway) -> "Agent":
        return cls(
            id=config.id,
            name=config.name,
            system_prompt=config.system_prompt,
            gateway=gateway,
            memory_size=config.memory_size,
            session_id=config.session_id,
            capabilities=list(config.capabilities),
        )

    @property
    def id(self) -> str:
        return self.config.id

    @property
    def name(self) -> str:
        return self.config.name

    @property
    def system_prompt(self) -> str:
        return self.config.system_prompt

    @property
    def session_id(self) -> str | None:
        return self.config.session_id

    @property
    def capabilities(self) -> tuple[Capability, ...]:
        return self.config.capabilities

    @property
    def memory_size(self) -> int:
        return self.config.memory_size

    def chat(self, user_input: str) -> str | None:
        """
        Run one conversational turn.

        Args:
            user_input: The user's message (may be empty)

        Returns:
            The assistant's final text, or None/"" if the model gave none

        Raises:
            Exception: Whatever the gateway raises, unchanged. History is
                not modified when this happens.
        """
        with self._turn_lock:
            logger.debug(f"Turn for session {self.session_id}: {user_input[:50]}")

            with self._history_lock:
                context = self.context_assembler.assemble(self._history, user_input)

            try:
                completion = self.gateway.complete(
                    list(context.messages),
                    tools=context.tools_or_none()
                )
            except Exception as e:
                logger.error(f"Gateway call failed for agent '{self.name}'", e)
                raise

            content = completion.content

            with self._history_lock:
                self._history.append(context.user_message)
                if content:
                    self._history.append(Message.assistant(content))
                history_size = len(self._history)

            if not content:
                logger.warning("Gateway returned no content; only the user message was recorded")

            logger.debug(f"History size: {history_size}/{self.memory_size}")
            return content

    def get_history(self) -> tuple[Message, ...]:
        """
        Get the conversation history, oldest first.

        Returns a snapshot; changing it cannot affect the agent.
        """
        with self._history_lock:
            return self._history.snapshot()

    @property
    def history(self) -> tuple[Message, ...]:
        return self.get_history()
