"""
Model Gateway
=============

Wraps one chat completion backend and turns every response into an LLMResult:

    chat completion
         │
         ▼
    ┌── tool_calls? ──┐
    │                 │
    Yes               No
    │                 │
    ▼                 ▼
    LLMResult(        parse content as JSON
      tool_calls=..., → LLMResult(content=AgentResponse(...))
      content=...)

``call`` never raises. Any failure (bad provider, network, unparseable
content) is logged and returned as a degraded result whose output describes
the problem and whose ``error`` names the error class. The agent loop can then
treat the failure as just another turn.
"""

import json
from typing import Any, Protocol

from openai import AsyncOpenAI

from neuron.errors import (
    ContentParsingError,
    InvalidProviderError,
    LLMModelError,
    ProviderError,
)
from neuron.types import (
    AgentResponse,
    DEFAULT_PROVIDER,
    LLMResult,
    PROVIDERS,
    ToolCallRequest,
)
from neuron.utils.logger import Logger, LoggerLike

DEFAULT_MODEL = "gpt-4o"

GENERIC_ERROR_MESSAGE = "An error occurred while processing your request."


class ChatModel(Protocol):
    """Anything the agent can call for a turn."""

    async def call(
        self,
        messages: list[dict[str, Any]],
        tools: list[dict[str, Any]] | None = None,
    ) -> LLMResult:
        ...


class LLM:
    """
    Model gateway for a single provider.

    Only ``openai`` has a backend; ``anthropic`` and ``google`` are accepted
    but every call to them returns an "not yet implemented" error result.

    Example:
        llm = LLM(provider="openai", api_key="sk-...")
        result = await llm.call(
            [{"role": "user", "content": "Hi"}],
            tools=[tool.to_openai_function()],
        )
        if result.tool_calls:
            ...
    """

    def __init__(
        self,
        provider: str = DEFAULT_PROVIDER,
        api_key: str | None = None,
        default_model: str = DEFAULT_MODEL,
        logger: LoggerLike | None = None,
        timeout: float | None = None,
        client: Any = None
    ):
        """
        Initialize the gateway.

        Args:
            provider: One of openai, anthropic, google
            api_key: Credential for the provider
            default_model: Model used for every call; trimmed, must be non-empty
            logger: Logger for errors; defaults to Logger("LLM")
            timeout: Seconds before a request is abandoned (openai only)
            client: Pre-built client to use instead of creating one

        Raises:
            InvalidProviderError: Unknown provider, or the client cannot be built
            LLMModelError: Empty model name
        """
        self.provider = self._validate_provider(provider)
        self.model = self._validate_model(default_model)
        self.logger = logger or Logger("LLM")
        self.client = client if client is not None else self._initialize_client(api_key, timeout)

    async def call(
        self,
        messages: list[dict[str, Any]],
        tools: list[dict[str, Any]] | None = None,
    ) -> LLMResult:
        """
        Run one model turn.

        Args:
            messages: Transcript in chat completion format
            tools: Tool schemas in OpenAI function format

        Returns:
            LLMResult with either tool calls or parsed content. On failure,
            a degraded result describing the error.
        """
        try:
            if self.provider == "openai":
                return await self._call_openai(messages, tools or [])
            if self.provider == "anthropic":
                raise InvalidProviderError("Anthropic support not yet implemented")
            if self.provider == "google":
                raise InvalidProviderError("Google support not yet implemented")
            raise InvalidProviderError(f"Unsupported provider: {self.provider}")
        except Exception as e:
            return self._handle_error(e)

    async def _call_openai(
        self,
        messages: list[dict[str, Any]],
        tools: list[dict[str, Any]],
    ) -> LLMResult:
        request_params: dict[str, Any] = {
            "model": self.model,
            "messages": messages,
            "response_format": {"type": "json_object"},
        }
        if tools:
            request_params["tools"] = tools

        try:
            response = await self.client.chat.completions.create(**request_params)
            message = response.choices[0].message
        except Exception as e:
            raise ProviderError(f"Failed to call OpenAI API: {e}") from e

        return self._prepare_result(message)

    def _prepare_result(self, message: Any) -> LLMResult:
        if message.tool_calls:
            return self._prepare_tool_call_result(message)
        return self._prepare_content_result(message.content)

    def _prepare_tool_call_result(self, message: Any) -> LLMResult:
        tool_calls = [
            ToolCallRequest(
                function_name=tc.function.name,
                arguments_json=tc.function.arguments or "",
                id=getattr(tc, "id", None),
            )
            for tc in message.tool_calls
        ]
        return LLMResult(
            tool_calls=tool_calls,
            content=AgentResponse(output=message.content),
        )

    def _prepare_content_result(self, content: str | None) -> LLMResult:
        trimmed = (content or "").strip()
        try:
            parsed = json.loads(trimmed)
        except json.JSONDecodeError as e:
            raise ContentParsingError(f"Failed to parse JSON content: {e}") from e

        if not isinstance(parsed, dict):
            raise ContentParsingError(
                f"Failed to prepare content result: expected a JSON object, "
                f"got {type(parsed).__name__}"
            )

        return LLMResult(content=AgentResponse.from_dict(parsed))

    def _initialize_client(self, api_key: str | None, timeout: float | None) -> Any:
        # Stub providers have no client; their calls fail with InvalidProviderError
        if self.provider != "openai":
            return None

        try:
            if timeout is not None:
                return AsyncOpenAI(api_key=api_key, timeout=timeout)
            return AsyncOpenAI(api_key=api_key)
        except Exception as e:
            raise InvalidProviderError(
                f"Failed to initialize {self.provider} client: {e}"
            ) from e

    @staticmethod
    def _validate_provider(provider: str) -> str:
        if provider not in PROVIDERS:
            raise InvalidProviderError(
                f"Invalid provider. Must be one of: {', '.join(PROVIDERS)}"
            )
        return provider

    @staticmethod
    def _validate_model(model: Any) -> str:
        if not isinstance(model, str) or not model.strip():
            raise LLMModelError("Model name must be a non-empty string")
        return model.strip()

    def _handle_error(self, error: Exception) -> LLMResult:
        if isinstance(error, ContentParsingError):
            error_message = f"Content parsing error: {error}"
        elif isinstance(error, ProviderError):
            error_message = f"Provider error: {error}"
        elif isinstance(error, LLMModelError):
            error_message = f"LLM model error: {error}"
        elif isinstance(error, InvalidProviderError):
            error_message = f"Invalid provider error: {error}"
        else:
            error_message = f"Unexpected error: {error}"

        self.logger.error(error_message, error)

        return LLMResult(
            content=AgentResponse(output=f"{GENERIC_ERROR_MESSAGE} {error_message}"),
            error=type(error).__name__,
        )
