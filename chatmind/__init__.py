"""
ChatMind - Minimal Conversational Agent
=======================================

A small agent around a chat-completion model with manually managed
conversation history and optional tool calling.

This package provides:
- Agent with a bounded FIFO conversation history
- Capability descriptors and a tool registry (FIXED / DYNAMIC tools)
- A model gateway interface with an OpenAI implementation
- A terminal chat entry point
"""

__version__ = "1.0.0"
