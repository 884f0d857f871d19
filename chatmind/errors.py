"""
Error Types
===========

Exceptions raised by the agent and its collaborators.

Hierarchy:
    ChatMindError
    ├── GatewayError               (model call failed)
    └── ConfigurationError         (bad construction parameters / env)
        └── DuplicateCapabilityError

The agent is a thin, fail-fast layer: it never retries or swallows a
gateway failure. Whatever the gateway raises reaches the caller of
Agent.chat() unchanged, and the conversation history is left as it was.
"""


class ChatMindError(Exception):
    """Base class for all ChatMind errors."""


class GatewayError(ChatMindError):
    """
    The model gateway failed to produce a completion.

    Attributes:
        cause: The underlying exception (network, auth, model-side), if any
    """

    def __init__(self, message: str, cause: Exception | None = None):
        super().__init__(message)
        self.cause = cause


class ConfigurationError(ChatMindError, ValueError):
    """Invalid construction parameters or missing configuration."""


class DuplicateCapabilityError(ConfigurationError):
    """Two capabilities in one advertised set share a name."""

    def __init__(self, name: str):
        super().__init__(f"Capability '{name}' is defined more than once")
        self.name = name
