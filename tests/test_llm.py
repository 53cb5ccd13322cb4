"""Tests for the model gateway."""

import pytest

from conftest import chat_message, fake_openai_client, openai_tool_call
from neuron.errors import InvalidProviderError, LLMModelError
from neuron.llm import GENERIC_ERROR_MESSAGE, LLM
from neuron.types import AgentResponse, ToolCallRequest

MESSAGES = [{"role": "user", "content": "Hi"}]


def make_llm(logger, message=None, error=None, **kwargs) -> LLM:
    return LLM(
        provider=kwargs.pop("provider", "openai"),
        api_key="sk-test",
        logger=logger,
        client=fake_openai_client(message=message, error=error),
        **kwargs,
    )


def test_rejects_unknown_provider(logger):
    with pytest.raises(InvalidProviderError, match="openai, anthropic, google"):
        LLM(provider="mistral", api_key="sk-test", logger=logger)


@pytest.mark.parametrize("model", ["", "   ", None, 42])
def test_rejects_empty_model(logger, model):
    with pytest.raises(LLMModelError):
        LLM(api_key="sk-test", default_model=model, logger=logger)


def test_model_is_trimmed(logger):
    llm = make_llm(logger, default_model="  gpt-4o-mini  ")
    assert llm.model == "gpt-4o-mini"


def test_builds_openai_client(logger):
    llm = LLM(api_key="sk-test", logger=logger, timeout=5)
    assert llm.client is not None


@pytest.mark.asyncio
async def test_parses_structured_content(logger):
    llm = make_llm(
        logger,
        message=chat_message(content='  {"thoughtProcess": "thinking", "stop": false}  '),
    )

    result = await llm.call(MESSAGES, [])

    assert result.content == AgentResponse(thought_process="thinking", output=None, stop=False)
    assert result.tool_calls is None
    assert not result.is_error


@pytest.mark.asyncio
async def test_final_content(logger):
    llm = make_llm(logger, message=chat_message(content='{"output": "done", "stop": true}'))

    result = await llm.call(MESSAGES)

    assert result.output == "done"
    assert result.stop


@pytest.mark.asyncio
async def test_request_shape(logger):
    llm = make_llm(logger, message=chat_message(content='{"output": "ok"}'))
    tools = [{"type": "function", "function": {"name": "echo"}}]

    await llm.call(MESSAGES, tools)
    await llm.call(MESSAGES, [])

    with_tools, without_tools = llm.client.chat.completions.requests
    assert with_tools["model"] == "gpt-4o"
    assert with_tools["messages"] == MESSAGES
    assert with_tools["response_format"] == {"type": "json_object"}
    assert with_tools["tools"] == tools
    assert "tools" not in without_tools


@pytest.mark.asyncio
async def test_tool_call_result(logger):
    llm = make_llm(
        logger,
        message=chat_message(
            content=None,
            tool_calls=[
                openai_tool_call("echo", '{"x": "y"}'),
                openai_tool_call("other", "{}", call_id="call_2"),
            ],
        ),
    )

    result = await llm.call(MESSAGES, [])

    assert result.tool_calls == [
        ToolCallRequest(function_name="echo", arguments_json='{"x": "y"}', id="call_1"),
        ToolCallRequest(function_name="other", arguments_json="{}", id="call_2"),
    ]
    assert result.content == AgentResponse(output=None)


@pytest.mark.asyncio
async def test_backend_failure_is_degraded(logger):
    llm = make_llm(logger, error=ConnectionError("network down"))

    result = await llm.call(MESSAGES, [])

    assert result.is_error
    assert result.error == "ProviderError"
    assert result.output.startswith(GENERIC_ERROR_MESSAGE)
    assert "Provider error" in result.output
    assert "network down" in result.output
    assert logger.messages("error")


@pytest.mark.asyncio
async def test_invalid_json_is_degraded(logger):
    llm = make_llm(logger, message=chat_message(content="not json at all"))

    result = await llm.call(MESSAGES, [])

    assert result.error == "ContentParsingError"
    assert "Content parsing error" in result.output


@pytest.mark.asyncio
async def test_non_object_json_is_degraded(logger):
    llm = make_llm(logger, message=chat_message(content='["a", "b"]'))

    result = await llm.call(MESSAGES, [])

    assert result.error == "ContentParsingError"


@pytest.mark.asyncio
async def test_empty_content_is_degraded(logger):
    llm = make_llm(logger, message=chat_message(content=None))

    result = await llm.call(MESSAGES, [])

    assert result.error == "ContentParsingError"


@pytest.mark.asyncio
@pytest.mark.parametrize("provider, name", [("anthropic", "Anthropic"), ("google", "Google")])
async def test_stub_providers_fail_explicitly(logger, provider, name):
    llm = LLM(provider=provider, api_key="key", logger=logger)

    result = await llm.call(MESSAGES, [])

    assert result.error == "InvalidProviderError"
    assert f"{name} support not yet implemented" in result.output


@pytest.mark.asyncio
async def test_error_is_logged_with_stack(logger):
    llm = make_llm(logger, error=RuntimeError("kaboom"))

    await llm.call(MESSAGES, [])

    level, message, error = logger.records[-1]
    assert level == "error"
    assert "Provider error" in message
    assert isinstance(error.__cause__, RuntimeError)
