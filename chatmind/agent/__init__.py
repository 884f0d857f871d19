"""
Agent System
============

The agent turns a user message into a model request, hands it to a model
gateway, and folds the exchange back into a bounded history.

This module provides:
- Agent: Main agent class (chat / get_history)
- AgentConfig: Validated identity and policy of an agent
- ContextAssembler: Builds the per-turn outbound message list
- ToolExecutor: Runs tool calls inside the gateway's tool loop
"""

from chatmind.agent.core import Agent, AgentConfig
from chatmind.agent.context import AssembledContext, ContextAssembler
from chatmind.agent.tools_executor import ToolExecutor

__all__ = ["Agent", "AgentConfig", "AssembledContext", "ContextAssembler", "ToolExecutor"]
