import pytest

from chatmind.errors import ConfigurationError
from chatmind.utils import config as config_module
from chatmind.utils.config import DEFAULT_SYSTEM_PROMPT, get_config, load_config, reset_config


@pytest.fixture(autouse=True)
def _no_dotenv(monkeypatch):
    # Keep a developer's local .env out of the tests
    monkeypatch.setattr(config_module, "load_dotenv", lambda: None)
    reset_config()
    yield
    reset_config()


def test_defaults(monkeypatch):
    monkeypatch.setenv("OPENAI_API_KEY", "sk-test")

    config = load_config()

    assert config.openai.api_key == "sk-test"
    assert config.openai.model == "gpt-4o-mini"
    assert config.openai.base_url is None
    assert config.openai.timeout_seconds == 60.0
    assert config.openai.max_tool_iterations == 10
    assert config.agent.name == "ChatMind"
    assert config.agent.system_prompt == DEFAULT_SYSTEM_PROMPT
    assert config.agent.memory_size == 20
    assert config.agent.enable_tools is True
    assert config.log_level == "info"


def test_overrides(monkeypatch):
    monkeypatch.setenv("OPENAI_API_KEY", "sk-test")
    monkeypatch.setenv("OPENAI_MODEL", "gpt-test")
    monkeypatch.setenv("OPENAI_BASE_URL", "http://localhost:8000/v1")
    monkeypatch.setenv("OPENAI_TIMEOUT_SECONDS", "2.5")
    monkeypatch.setenv("AGENT_MEMORY_SIZE", "4")
    monkeypatch.setenv("AGENT_ENABLE_TOOLS", "false")
    monkeypatch.setenv("AGENT_SYSTEM_PROMPT", "Be terse.")

    config = load_config()

    assert config.openai.model == "gpt-test"
    assert config.openai.base_url == "http://localhost:8000/v1"
    assert config.openai.timeout_seconds == 2.5
    assert config.agent.memory_size == 4
    assert config.agent.enable_tools is False
    assert config.agent.system_prompt == "Be terse."


def test_missing_api_key():
    with pytest.raises(ConfigurationError, match="OPENAI_API_KEY"):
        load_config()


@pytest.mark.parametrize("value", ["0", "-2", "ten"])
def test_invalid_memory_size(monkeypatch, value):
    monkeypatch.setenv("OPENAI_API_KEY", "sk-test")
    monkeypatch.setenv("AGENT_MEMORY_SIZE", value)

    with pytest.raises(ConfigurationError):
        load_config()


def test_get_config_is_cached(monkeypatch):
    monkeypatch.setenv("OPENAI_API_KEY", "sk-test")

    first = get_config()
    monkeypatch.setenv("OPENAI_MODEL", "changed")

    assert get_config() is first

    reset_config()
    assert get_config().openai.model == "changed"
