"""
Neuron - Minimal Agent Orchestration
====================================

Drives a conversation between a user, a language model and a set of tools
until the model says it is done or the iteration budget runs out.

This package provides:
- Agent: The conversation loop and its transcript
- Tool: Named, schema-validated functions the model can call
- LLM: The model gateway (OpenAI), which never raises from ``call``
- Errors: One exception class per failure kind
"""

from neuron.agent import Agent, AgentConfig
from neuron.errors import (
    ContentParsingError,
    ExecutionError,
    InvalidImplementationError,
    InvalidProviderError,
    InvalidSecretsError,
    LLMModelError,
    NeuronError,
    ProviderError,
)
from neuron.llm import LLM
from neuron.tools import Tool
from neuron.types import (
    AgentResponse,
    LLMResult,
    Message,
    PropertySpec,
    ToolCallRequest,
    ToolConfig,
    ToolParameters,
)

__version__ = "0.1.0"

__all__ = [
    "Agent",
    "AgentConfig",
    "Tool",
    "LLM",
    "AgentResponse",
    "LLMResult",
    "Message",
    "PropertySpec",
    "ToolCallRequest",
    "ToolConfig",
    "ToolParameters",
    "NeuronError",
    "InvalidImplementationError",
    "InvalidSecretsError",
    "ExecutionError",
    "InvalidProviderError",
    "ContentParsingError",
    "ProviderError",
    "LLMModelError",
]
