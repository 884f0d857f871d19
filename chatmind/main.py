"""
ChatMind - Main Entry Point
===========================

Interactive terminal chat with a single agent. It:
1. Loads configuration
2. Registers the built-in tools
3. Creates the OpenAI gateway and the agent
4. Reads lines from stdin, one turn per line

Commands:
    /history   print the retained conversation history
    /exit      quit (EOF works too)

Run with:
    python -m chatmind.main

Or after installing:
    chatmind
"""

import sys
import uuid
from typing import TextIO

from chatmind.agent import Agent
from chatmind.errors import ConfigurationError, GatewayError
from chatmind.gateway import OpenAIGateway
from chatmind.tools import ToolRegistry
from chatmind.tools.builtin import register_builtin_tools
from chatmind.utils.config import Config, get_config
from chatmind.utils.logger import Logger, set_default_level

main_logger = Logger("Main")

PROMPT = "you> "


def build_agent(config: Config) -> Agent:
    """
    Wire up the registry, gateway and agent from configuration.

    Args:
        config: Loaded application configuration

    Returns:
        A ready agent with a fresh session id
    """
    registry = ToolRegistry()
    if config.agent.enable_tools:
        register_builtin_tools(registry)

    gateway = OpenAIGateway.from_config(config.openai, registry)

    return Agent(
        id=f"agent-{uuid.uuid4().hex[:8]}",
        name=config.agent.name,
        system_prompt=config.agent.system_prompt,
        gateway=gateway,
        memory_size=config.agent.memory_size,
        session_id=uuid.uuid4().hex,
        capabilities=registry.capabilities(),
    )


def format_history(agent: Agent) -> str:
    history = agent.get_history()
    if not history:
        return "(history is empty)"
    return "\n".join(f"[{m.role.value}] {m.content}" for m in history)


def repl(
    agent: Agent,
    stdin: TextIO | None = None,
    stdout: TextIO | None = None
) -> None:
    """
    Run the read-eval-print loop until /exit or EOF.

    Streams default to sys.stdin / sys.stdout as they are at call time.

    A failed turn is reported and the loop continues; the agent's history
    is unchanged by the failure, so the user can just try again.
    """
    stdin = stdin if stdin is not None else sys.stdin
    stdout = stdout if stdout is not None else sys.stdout

    while True:
        stdout.write(PROMPT)
        stdout.flush()

        line = stdin.readline()
        if not line:
            break

        text = line.rstrip("\n")
        command = text.strip()

        if command == "/exit":
            break
        if command == "/history":
            stdout.write(format_history(agent) + "\n")
            continue

        try:
            reply = agent.chat(text)
        except GatewayError as e:
            main_logger.error("Turn failed", e)
            stdout.write(f"[error] {e}\n")
            continue

        stdout.write(f"{agent.name}> {reply or ''}\n")


def main() -> int:
    """
    Load configuration and run the interactive chat.

    Returns:
        Process exit code
    """
    main_logger.info("Starting ChatMind...")

    try:
        config = get_config()
        set_default_level(config.log_level)
        agent = build_agent(config)
    except ConfigurationError as e:
        main_logger.error("Invalid configuration", e)
        return 1

    main_logger.info(f"Session {agent.session_id} ready. Type /exit to quit.")
    repl(agent)
    main_logger.info("Goodbye")
    return 0


def run():
    """Console-script entry point."""
    try:
        sys.exit(main())
    except KeyboardInterrupt:
        pass


if __name__ == "__main__":
    run()
