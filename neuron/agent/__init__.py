"""
Agent System
============

This module provides:
- Agent: Runs the model/tool loop over a persistent transcript
- AgentConfig: Validated construction options for an Agent
- ToolExecutor: Resolves and runs the tool the model asked for
- build_system_prompt: Persona/goal prompt template
"""

from neuron.agent.core import Agent, AgentConfig
from neuron.agent.prompt import build_system_prompt
from neuron.agent.tools_executor import ToolExecutor

__all__ = ["Agent", "AgentConfig", "ToolExecutor", "build_system_prompt"]
