"""
Configuration Management
========================

Centralized configuration for ChatMind. Environment variables (optionally
loaded from a .env file) are read and typed here once, so the rest of the
code never calls os.getenv() directly.

Required:
    OPENAI_API_KEY

Optional:
    OPENAI_MODEL            Chat model (default: gpt-4o-mini)
    OPENAI_BASE_URL         OpenAI-compatible endpoint
    OPENAI_TIMEOUT_SECONDS  Request timeout (default: 60)
    MAX_TOOL_ITERATIONS     Tool-resolution rounds per turn (default: 10)
    AGENT_NAME              Display name (default: ChatMind)
    AGENT_SYSTEM_PROMPT     System prompt sent with every turn
    AGENT_MEMORY_SIZE       History capacity in messages (default: 20)
    AGENT_ENABLE_TOOLS      Advertise built-in tools (default: true)
    LOG_LEVEL               debug / info / warning / error (default: info)

Usage:
    from chatmind.utils.config import get_config

    config = get_config()
    print(config.openai.model)
    print(config.agent.memory_size)
"""

import os
from dataclasses import dataclass

from dotenv import load_dotenv

from chatmind.errors import ConfigurationError


DEFAULT_SYSTEM_PROMPT = (
    "You are ChatMind, a helpful assistant. Answer concisely. "
    "When a tool can answer the question, call it instead of guessing."
)


def _required(name: str) -> str:
    """
    Get a required environment variable.

    Raises:
        ConfigurationError: If the variable is not set
    """
    value = os.getenv(name)
    if not value:
        raise ConfigurationError(
            f"Missing required environment variable: {name}\n"
            f"Please ensure {name} is set in your environment or .env file."
        )
    return value


def _optional(name: str, default: str) -> str:
    return os.getenv(name) or default


def _optional_int(name: str, default: int) -> int:
    """
    Get an optional integer environment variable.

    Raises:
        ConfigurationError: If the variable is set but not an integer
    """
    value = os.getenv(name)
    if not value:
        return default
    try:
        return int(value)
    except ValueError:
        raise ConfigurationError(f"{name} must be an integer, got {value!r}") from None


def _optional_float(name: str, default: float) -> float:
    value = os.getenv(name)
    if not value:
        return default
    try:
        return float(value)
    except ValueError:
        raise ConfigurationError(f"{name} must be a number, got {value!r}") from None


def _optional_bool(name: str, default: bool) -> bool:
    """True only for 'true', '1' or 'yes' (case-insensitive)."""
    value = os.getenv(name)
    if not value:
        return default
    return value.strip().lower() in ("true", "1", "yes")


# ==============================================================================
# Configuration Dataclasses
# ==============================================================================

@dataclass(frozen=True)
class OpenAIConfig:
    """OpenAI API configuration."""
    api_key: str                # sk-... API key
    model: str                  # Model for chat completions
    base_url: str | None        # Alternative OpenAI-compatible endpoint
    timeout_seconds: float      # Per-request timeout
    max_tool_iterations: int    # Upper bound on tool rounds per turn


@dataclass(frozen=True)
class AgentSettings:
    """Defaults used when the CLI constructs an agent."""
    name: str
    system_prompt: str
    memory_size: int
    enable_tools: bool


@dataclass(frozen=True)
class Config:
    """
    Root configuration object.

    Access via:
        config = get_config()
        config.openai.api_key
        config.agent.memory_size
    """
    openai: OpenAIConfig
    agent: AgentSettings
    log_level: str


def load_config() -> Config:
    """
    Load and validate configuration from the environment.

    Loads .env first (existing environment variables win), then builds
    the typed Config.

    Raises:
        ConfigurationError: If required configuration is missing or invalid
    """
    load_dotenv()

    memory_size = _optional_int("AGENT_MEMORY_SIZE", 20)
    if memory_size <= 0:
        raise ConfigurationError(f"AGENT_MEMORY_SIZE must be positive, got {memory_size}")

    max_tool_iterations = _optional_int("MAX_TOOL_ITERATIONS", 10)
    if max_tool_iterations < 0:
        raise ConfigurationError("MAX_TOOL_ITERATIONS must not be negative")

    return Config(
        openai=OpenAIConfig(
            api_key=_required("OPENAI_API_KEY"),
            model=_optional("OPENAI_MODEL", "gpt-4o-mini"),
            base_url=os.getenv("OPENAI_BASE_URL") or None,
            timeout_seconds=_optional_float("OPENAI_TIMEOUT_SECONDS", 60.0),
            max_tool_iterations=max_tool_iterations,
        ),
        agent=AgentSettings(
            name=_optional("AGENT_NAME", "ChatMind"),
            system_prompt=_optional("AGENT_SYSTEM_PROMPT", DEFAULT_SYSTEM_PROMPT),
            memory_size=memory_size,
            enable_tools=_optional_bool("AGENT_ENABLE_TOOLS", True),
        ),
        log_level=_optional("LOG_LEVEL", "info"),
    )


# ==============================================================================
# Singleton
# ==============================================================================

_config_instance: Config | None = None


def get_config() -> Config:
    """
    Get the cached configuration, loading it on first access.

    Returns:
        Config: The application configuration
    """
    global _config_instance
    if _config_instance is None:
        _config_instance = load_config()
    return _config_instance


def reset_config() -> None:
    """Forget the cached configuration so the next get_config() reloads it."""
    global _config_instance
    _config_instance = None
