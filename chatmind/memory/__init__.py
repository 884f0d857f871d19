"""
Memory
======

Short-term conversation memory for agents: a role-tagged Message type
and a size-bounded, FIFO-evicting ConversationHistory.

Usage:
    from chatmind.memory import ConversationHistory, Message

    history = ConversationHistory(max_messages=20)
    history.append(Message.user("Hello!"))
"""

from chatmind.memory.history import ConversationHistory, Message, Role

__all__ = ["ConversationHistory", "Message", "Role"]
