"""
Configuration Management
========================

Environment configuration for the command line entry point. The library
classes (Agent, LLM, Tool) never read this module: they take explicit
arguments, so several agents with different settings can live in one process.

Variables:
    OPENAI_API_KEY          required, passed to the agent as a secret
    OPENAI_MODEL            model name (default: gpt-4o)
    NEURON_PROVIDER         openai | anthropic | google (default: openai)
    NEURON_MAX_ITERATIONS   agent loop ceiling (default: 10)
    NEURON_LLM_TIMEOUT      seconds per model request (optional)
    NEURON_TOOL_TIMEOUT     seconds per tool call (optional)
    LOG_LEVEL               debug | info | warning | error (default: info)

Usage:
    from neuron.utils.config import get_config

    config = get_config()
    print(config.openai.model)
"""

import os
from dataclasses import dataclass, field

from dotenv import load_dotenv

from neuron.utils.logger import Logger

logger = Logger("Config")

DEFAULT_MODEL = "gpt-4o"
DEFAULT_MAX_ITERATIONS = 10


def _required(name: str) -> str:
    """
    Get a required environment variable.

    Raises:
        ValueError: If the variable is not set
    """
    value = os.getenv(name)
    if not value:
        raise ValueError(
            f"Missing required environment variable: {name}\n"
            f"Please ensure {name} is set in your .env file."
        )
    return value


def _optional(name: str, default: str) -> str:
    return os.getenv(name, default)


def _optional_int(name: str, default: int) -> int:
    """Get an optional integer environment variable, falling back on bad input."""
    value = os.getenv(name)
    if not value:
        return default
    try:
        return int(value)
    except ValueError:
        logger.warning(f"{name} is not a valid integer, using default: {default}")
        return default


def _optional_float(name: str) -> float | None:
    """Get an optional positive number of seconds, or None when unset."""
    value = os.getenv(name)
    if not value:
        return None
    try:
        seconds = float(value)
    except ValueError:
        logger.warning(f"{name} is not a valid number, ignoring it")
        return None
    return seconds if seconds > 0 else None


@dataclass(frozen=True)
class OpenAIConfig:
    """OpenAI API configuration."""
    api_key: str
    model: str
    timeout: float | None = None


@dataclass(frozen=True)
class AgentDefaults:
    """Defaults applied to agents built from the environment."""
    provider: str = "openai"
    max_iterations: int = DEFAULT_MAX_ITERATIONS
    tool_timeout: float | None = None


@dataclass(frozen=True)
class Config:
    """
    Root configuration object.

        config = get_config()
        config.openai.model
        config.agent.max_iterations
    """
    openai: OpenAIConfig
    agent: AgentDefaults = field(default_factory=AgentDefaults)
    log_level: str = "info"

    def secrets(self, **extra: str) -> dict[str, str]:
        """
        Build the secrets map handed to an Agent.

        The model credential is stored under OPENAI_API_KEY, which is where the
        agent looks for it. Extra keyword arguments are merged in.
        """
        secrets = {"OPENAI_API_KEY": self.openai.api_key}
        secrets.update(extra)
        return secrets


def load_config() -> Config:
    """
    Load and validate configuration from the environment.

    Loads a .env file first (searching up from the working directory), then
    reads the variables listed in the module docstring.

    Raises:
        ValueError: If OPENAI_API_KEY is missing
    """
    load_dotenv()

    return Config(
        openai=OpenAIConfig(
            api_key=_required("OPENAI_API_KEY"),
            model=_optional("OPENAI_MODEL", DEFAULT_MODEL),
            timeout=_optional_float("NEURON_LLM_TIMEOUT"),
        ),
        agent=AgentDefaults(
            provider=_optional("NEURON_PROVIDER", "openai"),
            max_iterations=_optional_int("NEURON_MAX_ITERATIONS", DEFAULT_MAX_ITERATIONS),
            tool_timeout=_optional_float("NEURON_TOOL_TIMEOUT"),
        ),
        log_level=_optional("LOG_LEVEL", "info"),
    )


_config_instance: Config | None = None


def get_config() -> Config:
    """Load the configuration on first access and reuse it afterwards."""
    global _config_instance
    if _config_instance is None:
        _config_instance = load_config()
    return _config_instance


def reset_config() -> None:
    """Forget the cached configuration (used by tests)."""
    global _config_instance
    _config_instance = None
