import io
import sys

import pytest

from chatmind.agent import Agent
from chatmind.errors import GatewayError
from chatmind import main as main_module
from chatmind.main import build_agent, repl
from chatmind.utils.config import AgentSettings, Config, OpenAIConfig
from chatmind.utils.logger import LogLevel, get_default_level, set_default_level

from conftest import ScriptedGateway


def make_config(enable_tools=True, log_level="info"):
    return Config(
        openai=OpenAIConfig(
            api_key="sk-test",
            model="gpt-test",
            base_url=None,
            timeout_seconds=5.0,
            max_tool_iterations=2,
        ),
        agent=AgentSettings(
            name="Bot",
            system_prompt="SYS",
            memory_size=6,
            enable_tools=enable_tools,
        ),
        log_level=log_level,
    )


def test_build_agent_advertises_builtin_tools():
    agent = build_agent(make_config())

    assert agent.name == "Bot"
    assert agent.memory_size == 6
    assert [c.name for c in agent.capabilities] == ["getCity", "directAnswer"]
    assert agent.session_id


def test_build_agent_without_tools():
    agent = build_agent(make_config(enable_tools=False))

    assert agent.capabilities == ()


def run_repl(gateway, text):
    agent = Agent("a", "Bot", "SYS", gateway, memory_size=4)
    out = io.StringIO()
    repl(agent, stdin=io.StringIO(text), stdout=out)
    return agent, out.getvalue()


def test_repl_runs_turns_until_exit():
    agent, output = run_repl(ScriptedGateway("hello"), "hi\n/history\n/exit\nignored\n")

    assert "Bot> hello" in output
    assert "[user] hi" in output
    assert "[assistant] hello" in output
    assert len(agent.get_history()) == 2


def test_repl_reports_gateway_errors_and_continues():
    agent, output = run_repl(ScriptedGateway(GatewayError("offline"), "back"), "hi\nhi again\n")

    assert "[error] offline" in output
    assert "Bot> back" in output
    assert [m.content for m in agent.get_history()] == ["hi again", "back"]


def test_repl_empty_history():
    _, output = run_repl(ScriptedGateway(), "/history\n")

    assert "(history is empty)" in output


def test_repl_uses_current_standard_streams(monkeypatch):
    agent = Agent("a", "Bot", "SYS", ScriptedGateway("hello"), memory_size=4)
    out = io.StringIO()
    monkeypatch.setattr(sys, "stdin", io.StringIO("hi\n"))
    monkeypatch.setattr(sys, "stdout", out)

    repl(agent)

    assert "Bot> hello" in out.getvalue()


@pytest.fixture
def restore_log_level():
    original = get_default_level()
    yield
    set_default_level(original)


def test_main_applies_configured_log_level(monkeypatch, restore_log_level):
    set_default_level(LogLevel.INFO)
    monkeypatch.setattr(main_module, "get_config", lambda: make_config(log_level="error"))
    monkeypatch.setattr(main_module, "repl", lambda agent: None)

    assert main_module.main() == 0
    assert get_default_level() is LogLevel.ERROR
