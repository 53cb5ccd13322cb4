"""Tests for environment configuration."""

import pytest

from neuron.utils import config as config_module
from neuron.utils.config import get_config, load_config, reset_config

ENV_VARS = [
    "OPENAI_API_KEY",
    "OPENAI_MODEL",
    "NEURON_PROVIDER",
    "NEURON_MAX_ITERATIONS",
    "NEURON_LLM_TIMEOUT",
    "NEURON_TOOL_TIMEOUT",
    "LOG_LEVEL",
]


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    # Keep a stray .env file from leaking into the tests
    monkeypatch.setattr(config_module, "load_dotenv", lambda: False)
    reset_config()
    yield
    reset_config()


def test_requires_api_key():
    with pytest.raises(ValueError, match="OPENAI_API_KEY"):
        load_config()


def test_defaults(monkeypatch):
    monkeypatch.setenv("OPENAI_API_KEY", "sk-env")

    config = load_config()

    assert config.openai.api_key == "sk-env"
    assert config.openai.model == "gpt-4o"
    assert config.openai.timeout is None
    assert config.agent.provider == "openai"
    assert config.agent.max_iterations == 10
    assert config.agent.tool_timeout is None
    assert config.log_level == "info"


def test_overrides(monkeypatch):
    monkeypatch.setenv("OPENAI_API_KEY", "sk-env")
    monkeypatch.setenv("OPENAI_MODEL", "gpt-4o-mini")
    monkeypatch.setenv("NEURON_MAX_ITERATIONS", "4")
    monkeypatch.setenv("NEURON_LLM_TIMEOUT", "30")
    monkeypatch.setenv("NEURON_TOOL_TIMEOUT", "2.5")

    config = load_config()

    assert config.openai.model == "gpt-4o-mini"
    assert config.agent.max_iterations == 4
    assert config.openai.timeout == 30.0
    assert config.agent.tool_timeout == 2.5


def test_bad_numbers_fall_back(monkeypatch):
    monkeypatch.setenv("OPENAI_API_KEY", "sk-env")
    monkeypatch.setenv("NEURON_MAX_ITERATIONS", "many")
    monkeypatch.setenv("NEURON_TOOL_TIMEOUT", "soon")

    config = load_config()

    assert config.agent.max_iterations == 10
    assert config.agent.tool_timeout is None


def test_secrets_map(monkeypatch):
    monkeypatch.setenv("OPENAI_API_KEY", "sk-env")

    secrets = load_config().secrets(WEATHER_KEY="w")

    assert secrets == {"OPENAI_API_KEY": "sk-env", "WEATHER_KEY": "w"}


def test_get_config_is_cached(monkeypatch):
    monkeypatch.setenv("OPENAI_API_KEY", "sk-env")

    assert get_config() is get_config()
