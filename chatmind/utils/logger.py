"""
Logger Utility
==============

Lightweight context-aware logging used throughout ChatMind.

Features:
1. Log levels (DEBUG, INFO, WARNING, ERROR) filtered by LOG_LEVEL
2. One line per record: [TIMESTAMP] [LEVEL] [context] message
3. Per-component context prefixes, with child loggers ("Gateway:ToolLoop")
4. Optional structured data printed as JSON under the line

Usage:
    from chatmind.utils.logger import Logger

    logger = Logger("Agent")
    logger.info("Turn complete", {"history_size": 4})
"""

import json
import os
import sys
from datetime import datetime
from enum import IntEnum
from typing import Any


class LogLevel(IntEnum):
    """Numeric log levels; higher means more severe."""
    DEBUG = 10
    INFO = 20
    WARNING = 30
    ERROR = 40


class Colors:
    """ANSI escape codes for colored terminal output."""
    RESET = "\033[0m"
    DEBUG = "\033[36m"    # Cyan
    INFO = "\033[32m"     # Green
    WARNING = "\033[33m"  # Yellow
    ERROR = "\033[31m"    # Red
    DIM = "\033[2m"


_LEVEL_NAMES = {
    "DEBUG": LogLevel.DEBUG,
    "INFO": LogLevel.INFO,
    "WARNING": LogLevel.WARNING,
    "WARN": LogLevel.WARNING,
    "ERROR": LogLevel.ERROR,
}


def parse_level(value: str | None) -> LogLevel:
    """
    Parse a level name such as "debug" or "WARN".

    Unknown or empty values fall back to INFO.
    """
    if not value:
        return LogLevel.INFO
    return _LEVEL_NAMES.get(value.strip().upper(), LogLevel.INFO)


def _get_log_level_from_env() -> LogLevel:
    return parse_level(os.getenv("LOG_LEVEL"))


# Level used by every logger created without an explicit one
_default_level: LogLevel = _get_log_level_from_env()


def set_default_level(level: LogLevel | str) -> None:
    """
    Change the level of all loggers that have no explicit level.

    Module-level loggers are created at import time, before any .env file
    is loaded; call this once configuration is known.
    """
    global _default_level
    _default_level = parse_level(level) if isinstance(level, str) else level


def get_default_level() -> LogLevel:
    return _default_level


class Logger:
    """
    A context-aware logger with colored output.

    Without an explicit level the logger follows the process-wide default
    (LOG_LEVEL, or whatever set_default_level() was given).

    Example:
        logger = Logger("Gateway")
        logger.debug("Sending request", {"messages": 3})
        logger.error("Request failed", err)  # always shown, on stderr

        loop_logger = logger.child("ToolLoop")
        loop_logger.debug("Iteration 1")  # [Gateway:ToolLoop] Iteration 1
    """

    def __init__(self, context: str = "", level: LogLevel | None = None):
        """
        Initialize a logger.

        Args:
            context: Prefix shown on every line (e.g. "Agent", "Tools")
            level: Explicit minimum level; follows the default if None
        """
        self.context = context
        self._level = level

    def child(self, child_context: str) -> "Logger":
        """
        Create a child logger with additional context.

        Args:
            child_context: Context appended after a colon

        Returns:
            A new Logger with combined context and the same level
        """
        new_context = f"{self.context}:{child_context}" if self.context else child_context
        return Logger(new_context, level=self._level)

    @property
    def level(self) -> LogLevel:
        return self._level if self._level is not None else _default_level

    def is_enabled_for(self, level: LogLevel) -> bool:
        return level >= self.level

    def _format_message(self, level: str, message: str, color: str) -> str:
        timestamp = datetime.now().isoformat(timespec="seconds")
        context_str = f"[{self.context}] " if self.context else ""

        return (
            f"{Colors.DIM}[{timestamp}]{Colors.RESET} "
            f"{color}[{level}]{Colors.RESET} "
            f"{context_str}{message}"
        )

    def _log(
        self,
        level: LogLevel,
        level_name: str,
        color: str,
        message: str,
        data: dict[str, Any] | None = None
    ) -> None:
        if not self.is_enabled_for(level):
            return

        formatted = self._format_message(level_name, message, color)

        # Errors go to stderr so they survive stdout redirection
        stream = sys.stderr if level >= LogLevel.ERROR else sys.stdout
        print(formatted, file=stream)

        if data:
            data_str = json.dumps(data, indent=2, default=str)
            print(f"{Colors.DIM}{data_str}{Colors.RESET}", file=stream)

    def debug(self, message: str, data: dict[str, Any] | None = None) -> None:
        """Log a debug message (only shown when LOG_LEVEL=DEBUG)."""
        self._log(LogLevel.DEBUG, "DEBUG", Colors.DEBUG, message, data)

    def info(self, message: str, data: dict[str, Any] | None = None) -> None:
        """Log an info message."""
        self._log(LogLevel.INFO, "INFO", Colors.INFO, message, data)

    def warning(self, message: str, data: dict[str, Any] | None = None) -> None:
        """Log a warning message."""
        self._log(LogLevel.WARNING, "WARN", Colors.WARNING, message, data)

    def error(self, message: str, error: Exception | None = None) -> None:
        """
        Log an error message.

        Args:
            message: The error message
            error: Optional exception; its type and text are included
        """
        data = None
        if error:
            data = {
                "error_type": type(error).__name__,
                "error_message": str(error),
            }
        self._log(LogLevel.ERROR, "ERROR", Colors.ERROR, message, data)


# Default logger for ad-hoc use
logger = Logger("ChatMind")
