"""Shared fixtures: a scripted gateway that records every call."""

import pytest

from chatmind.gateway import Completion


class ScriptedGateway:
    """
    Fake gateway returning queued replies in order.

    A queued exception is raised instead of returned.
    """

    def __init__(self, *replies):
        self.replies = list(replies)
        self.calls = []

    def queue(self, *replies):
        self.replies.extend(replies)

    def complete(self, messages, tools=None):
        self.calls.append({"messages": list(messages), "tools": tools})
        reply = self.replies.pop(0)
        if isinstance(reply, Exception):
            raise reply
        return Completion(content=reply)

    @property
    def last_call(self):
        return self.calls[-1]


@pytest.fixture
def gateway():
    return ScriptedGateway()


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    for name in (
        "OPENAI_API_KEY", "OPENAI_MODEL", "OPENAI_BASE_URL", "OPENAI_TIMEOUT_SECONDS",
        "MAX_TOOL_ITERATIONS", "AGENT_NAME", "AGENT_SYSTEM_PROMPT", "AGENT_MEMORY_SIZE",
        "AGENT_ENABLE_TOOLS", "LOG_LEVEL",
    ):
        monkeypatch.delenv(name, raising=False)
