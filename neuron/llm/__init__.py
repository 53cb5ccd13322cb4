"""
LLM Module
==========

The model gateway: one provider, one model, responses normalized to
LLMResult, failures returned instead of raised.
"""

from neuron.llm.gateway import LLM, ChatModel, DEFAULT_MODEL, GENERIC_ERROR_MESSAGE

__all__ = ["LLM", "ChatModel", "DEFAULT_MODEL", "GENERIC_ERROR_MESSAGE"]
