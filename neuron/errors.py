"""
Errors
======

Every failure raised by the library is a ``NeuronError`` carrying a stable
``code`` string, so callers can branch on the kind of failure without parsing
messages.

Where each error surfaces:
- Tool and Agent configuration problems raise straight to the caller
  (InvalidImplementationError, InvalidSecretsError)
- Tool runtime failures raise ExecutionError from Tool.execute, and are
  narrated into the transcript when they happen inside the agent loop
- Model gateway failures (InvalidProviderError, ContentParsingError,
  ProviderError, LLMModelError) are caught by the gateway and returned as a
  degraded LLMResult instead of being raised from ``call``
"""


class NeuronError(Exception):
    """
    Base class for all library errors.

    Attributes:
        message: Human-readable description
        code: Machine-readable error kind
    """

    def __init__(self, message: str, code: str):
        super().__init__(message)
        self.message = message
        self.code = code


class InvalidImplementationError(NeuronError):
    """A Tool or Agent is misconfigured, or a required tool input is missing."""

    def __init__(self, message: str):
        super().__init__(message, "INVALID_IMPLEMENTATION")


class InvalidSecretsError(NeuronError):
    """A secret declared by a tool was not provided."""

    def __init__(self, message: str):
        super().__init__(message, "INVALID_SECRETS")


class ExecutionError(NeuronError):
    """A tool had no implementation, or its implementation failed."""

    def __init__(self, message: str):
        super().__init__(message, "EXECUTION_ERROR")


class InvalidProviderError(NeuronError):
    """The selected model provider is unknown or not implemented."""

    def __init__(self, message: str):
        super().__init__(message, "INVALID_PROVIDER_ERROR")


class ContentParsingError(NeuronError):
    """The model's text did not parse as a structured agent response."""

    def __init__(self, message: str):
        super().__init__(message, "CONTENT_PARSER_ERROR")


class ProviderError(NeuronError):
    """The backend request itself failed (network, auth, rate limit...)."""

    def __init__(self, message: str):
        super().__init__(message, "PROVIDER_ERROR")


class LLMModelError(NeuronError):
    """The model identifier is empty or not a string."""

    def __init__(self, message: str):
        super().__init__(message, "LLM_MODEL_ERROR")


__all__ = [
    "NeuronError",
    "InvalidImplementationError",
    "InvalidSecretsError",
    "ExecutionError",
    "InvalidProviderError",
    "ContentParsingError",
    "ProviderError",
    "LLMModelError",
]
