"""Shared test fixtures."""

from types import SimpleNamespace

import pytest

from neuron.types import AgentResponse, LLMResult, ToolCallRequest


class RecordingLogger:
    """Logger that keeps every record instead of printing it."""

    def __init__(self):
        self.records: list[tuple[str, str, object]] = []

    def debug(self, message, data=None):
        self.records.append(("debug", message, data))

    def info(self, message, data=None):
        self.records.append(("info", message, data))

    def warning(self, message, data=None):
        self.records.append(("warning", message, data))

    def error(self, message, error=None):
        self.records.append(("error", message, error))

    def messages(self, level: str | None = None) -> list[str]:
        return [m for lvl, m, _ in self.records if level is None or lvl == level]


class StubLLM:
    """Gateway stub that replays scripted results and records each call."""

    def __init__(self, *results: LLMResult, repeat_last: bool = True):
        self.results = list(results)
        self.repeat_last = repeat_last
        self.calls: list[tuple[list[dict], list[dict] | None]] = []

    async def call(self, messages, tools=None):
        self.calls.append(([dict(m) for m in messages], tools))
        index = len(self.calls) - 1
        if index < len(self.results):
            return self.results[index]
        if self.repeat_last and self.results:
            return self.results[-1]
        raise AssertionError("StubLLM ran out of results")


def content(output=None, thought=None, stop=False) -> LLMResult:
    return LLMResult(content=AgentResponse(thought_process=thought, output=output, stop=stop))


def tool_call(name: str, arguments: str = "{}") -> LLMResult:
    return LLMResult(
        tool_calls=[ToolCallRequest(function_name=name, arguments_json=arguments, id="call_1")],
        content=AgentResponse(output=None),
    )


class FakeCompletions:
    """Stands in for ``client.chat.completions`` of the OpenAI SDK."""

    def __init__(self, message=None, error: Exception | None = None):
        self.message = message
        self.error = error
        self.requests: list[dict] = []

    async def create(self, **kwargs):
        self.requests.append(kwargs)
        if self.error is not None:
            raise self.error
        return SimpleNamespace(choices=[SimpleNamespace(message=self.message)])


def fake_openai_client(message=None, error: Exception | None = None):
    completions = FakeCompletions(message=message, error=error)
    return SimpleNamespace(chat=SimpleNamespace(completions=completions))


def chat_message(content=None, tool_calls=None):
    return SimpleNamespace(content=content, tool_calls=tool_calls)


def openai_tool_call(name: str, arguments: str, call_id: str = "call_1"):
    return SimpleNamespace(
        id=call_id,
        type="function",
        function=SimpleNamespace(name=name, arguments=arguments),
    )


@pytest.fixture
def logger() -> RecordingLogger:
    return RecordingLogger()


@pytest.fixture
def secrets() -> dict[str, str]:
    return {"OPENAI_API_KEY": "sk-test-key", "apiKey": "tool-secret"}
