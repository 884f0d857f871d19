"""
Utilities Module
================

Common utilities shared across the application:
- logger: Context-aware logging with levels
- config: Centralized configuration management
"""

from chatmind.utils.logger import Logger, LogLevel, logger
from chatmind.utils.config import get_config, reset_config, Config

__all__ = ["Logger", "LogLevel", "logger", "get_config", "reset_config", "Config"]
