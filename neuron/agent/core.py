"""
Agent Core
==========

The agent owns a transcript and a set of tools, and runs the loop that
drives the model until it says it is done.

Agent Loop:
    User Message
         │
         ▼
    ┌──► iteration > max? ── yes ──► return last output
    │        │ no
    │        ▼
    │    iteration == max? ── yes ──► add "Provide a final answer"
    │        │
    │        ▼
    │    LLM call (transcript + tool schemas)
    │        │
    │    ┌── Tool call? ──┐
    │    │                │
    │    Yes              No
    │    │                │
    │    ▼                ▼
    │    Run first tool   Add thoughtProcess / output
    │    Add its output   │
    │    │                ▼
    │    │            stop: true? ── yes ──► return output
    │    │                │ no
    └────┴────────────────┘

Failures inside the loop never abort it: a tool error (or anything else that
escapes the gateway) is added to the transcript as an assistant message and
the model gets another turn to react to it. Only configuration errors raise.

The transcript survives between ``execute`` calls, so a second call continues
the same conversation.
"""

import json
from dataclasses import dataclass, field, fields
from typing import Any, Mapping

from neuron.agent.prompt import build_system_prompt
from neuron.agent.tools_executor import ToolExecutor
from neuron.errors import InvalidImplementationError, InvalidProviderError, InvalidSecretsError
from neuron.llm import LLM, ChatModel, DEFAULT_MODEL
from neuron.tools import Tool
from neuron.types import (
    DEFAULT_PROVIDER,
    LLMResult,
    Message,
    PROVIDERS,
    ToolCallRequest,
    ToolConfig,
)
from neuron.utils.logger import Logger, LoggerLike, redact

# Secrets key holding the model credential
MODEL_CREDENTIAL_KEY = "OPENAI_API_KEY"

DEFAULT_MAX_ITERATIONS = 10

FINAL_ANSWER_PROMPT = "Provide a final answer"

INVALID_TOOL_MESSAGE = "Invalid tool_name, please try again"


@dataclass
class AgentConfig:
    """
    Everything an Agent is built from. Validated when created.

    Attributes:
        persona: Who the agent is (used when no prompt is given)
        goal: What the agent should achieve (used when no prompt is given)
        secrets: Secrets for tools and the model credential (OPENAI_API_KEY)
        prompt: Raw system prompt, replaces the persona/goal template
        tools: Tools or tool configs available to the model
        messages: Starting transcript; when non-empty no system prompt is added
        max_iterations: Turns before the agent is forced to answer
        provider: Model provider (openai, anthropic, google)
        model: Model name for the provider
        logger: Logger to use instead of a per-agent default
        llm: Pre-built gateway to use instead of creating one
        llm_timeout: Seconds per model request
        tool_timeout: Seconds per tool call
    """
    persona: str | None = None
    goal: str | None = None
    secrets: Mapping[str, str] | None = None
    prompt: str | None = None
    tools: list[Tool | ToolConfig] = field(default_factory=list)
    messages: list[Message | Mapping[str, Any]] = field(default_factory=list)
    max_iterations: int = DEFAULT_MAX_ITERATIONS
    provider: str = DEFAULT_PROVIDER
    model: str = DEFAULT_MODEL
    logger: LoggerLike | None = None
    llm: ChatModel | None = None
    llm_timeout: float | None = None
    tool_timeout: float | None = None

    def __post_init__(self):
        if not isinstance(self.secrets, Mapping):
            raise InvalidImplementationError("Agent config requires a secrets mapping")
        if not all(isinstance(v, str) for v in self.secrets.values()):
            raise InvalidImplementationError("Secret values must be strings")

        if not self.prompt and not (self.persona and self.goal):
            raise InvalidImplementationError(
                "Agent config requires either a prompt or both persona and goal"
            )

        if (
            isinstance(self.max_iterations, bool)
            or not isinstance(self.max_iterations, int)
            or self.max_iterations < 0
        ):
            raise InvalidImplementationError("max_iterations must be a non-negative integer")

        if self.provider not in PROVIDERS:
            raise InvalidProviderError(
                f"Invalid provider. Must be one of: {', '.join(PROVIDERS)}"
            )

        for tool in self.tools:
            if not isinstance(tool, (Tool, ToolConfig)):
                raise InvalidImplementationError(
                    f"Unsupported tool entry: {type(tool).__name__}"
                )

        self.messages = [
            m if isinstance(m, Message) else Message.from_dict(m) for m in self.messages
        ]

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "AgentConfig":
        """
        Build from a plain mapping. Unknown keys are rejected.

        Raises:
            InvalidImplementationError: If a key is not an AgentConfig field
        """
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise InvalidImplementationError(f"Unknown agent config keys: {', '.join(unknown)}")
        return cls(**data)


class Agent:
    """
    Runs a conversation between a user, a model and a set of tools.

    Example:
        agent = Agent(
            "WeatherAgent",
            AgentConfig(
                persona="A cheerful weather assistant",
                goal="Report the current weather for a location",
                secrets={"OPENAI_API_KEY": "sk-..."},
            ),
        )
        agent.register_tool(create_weather_tool())

        answer = await agent.execute("What's the weather in Tahoe?")
    """

    def __init__(self, name: str, config: AgentConfig | Mapping[str, Any]):
        """
        Build the agent.

        Args:
            name: Agent name, non-empty
            config: AgentConfig, or a mapping of its fields

        Raises:
            InvalidImplementationError: Bad name, config or tool configuration
            InvalidSecretsError: A tool or the model credential lacks a secret
            InvalidProviderError: Unknown provider
        """
        if not isinstance(config, AgentConfig):
            config = AgentConfig.from_dict(config)

        if not name:
            raise InvalidImplementationError("Agent name must be a non-empty string")

        self.name = name
        self.logger = config.logger or Logger(f"Agent:{name}")
        self.secrets: dict[str, str] = dict(config.secrets)
        self.prompt = build_system_prompt(config.persona, config.goal, config.prompt)
        self.provider = config.provider
        self.max_iterations = config.max_iterations

        self._messages: list[Message] = list(config.messages)
        self._tools: list[Tool] = []
        for entry in config.tools:
            self.register_tool(entry if isinstance(entry, Tool) else Tool.from_config(entry))

        self.tool_executor = ToolExecutor(
            self._tools, self.secrets, self.logger, timeout=config.tool_timeout
        )
        self.llm: ChatModel = config.llm or self._create_llm(config)

        self.logger.debug(self._redact(self.prompt))
        self.logger.info(f"Agent {name} initialized with {len(self._tools)} tools")

    @property
    def messages(self) -> list[Message]:
        """A copy of the transcript."""
        return list(self._messages)

    @property
    def tools(self) -> list[Tool]:
        return list(self._tools)

    async def execute(self, input: str, context: str | None = None) -> str:
        """
        Run the agent loop for one user input.

        Args:
            input: The user's message
            context: Background knowledge added as an assistant message
                before the first user message of the conversation

        Returns:
            The last output the model produced during this call, or ""
        """
        self._setup_messages(input, context)

        iteration = 0
        last_output: str | None = None

        while True:
            if iteration > self.max_iterations:
                self.logger.warning(f"Reached max iterations ({self.max_iterations})")
                break

            if iteration == self.max_iterations:
                self._push_message(Message(role="system", content=FINAL_ANSWER_PROMPT))

            try:
                result = await self.llm.call(
                    [m.to_dict() for m in self._messages],
                    self.tool_executor.schemas(),
                )
                if result.output is not None:
                    last_output = result.output

                await self._handle_llm_result(result)

                if result.stop:
                    break
            except Exception as e:
                self.logger.error(f"Turn {iteration} failed", e)
                self._push_message(Message(role="assistant", content=f"There was an error {e}"))

            iteration += 1

        return last_output or ""

    def register_tool(self, tool: Tool) -> None:
        """
        Add a tool. Names are not checked for duplicates; the first tool
        registered under a name is the one that gets called.

        Raises:
            InvalidSecretsError: If the agent lacks a secret the tool declares
        """
        missing = [name for name in tool.required_secrets if name not in self.secrets]
        if missing:
            raise InvalidSecretsError(
                f"Tool {tool.name} requires missing secrets: {', '.join(missing)}"
            )

        self._tools.append(tool)
        self.logger.debug(f"Registered tool: {tool.name}")

    def clear_conversation(self) -> None:
        """Drop the transcript; the next execute starts from the system prompt."""
        self._messages.clear()
        self.logger.info(f"Cleared conversation for {self.name}")

    def _create_llm(self, config: AgentConfig) -> LLM:
        if config.provider == "openai" and MODEL_CREDENTIAL_KEY not in self.secrets:
            raise InvalidSecretsError(f"Missing required secrets: {MODEL_CREDENTIAL_KEY}")

        return LLM(
            provider=config.provider,
            api_key=self.secrets.get(MODEL_CREDENTIAL_KEY),
            default_model=config.model,
            logger=self.logger,
            timeout=config.llm_timeout,
        )

    def _setup_messages(self, input: str, context: str | None) -> None:
        if not self._messages:
            self._push_message(Message(role="system", content=self.prompt))

            if context:
                self._push_message(Message(role="assistant", content=context))

        self._push_message(Message(role="user", content=input))

    async def _handle_llm_result(self, result: LLMResult) -> None:
        if result.is_error:
            self.logger.warning(f"Model call degraded: {result.error}")

        if result.tool_calls:
            output = await self._execute_tool(result.tool_calls[0])
            self._push_message(Message(role="assistant", content=output))
        else:
            content = result.content
            text = (content.thought_process or content.output) if content else None
            self._push_message(Message(role="assistant", content=text or ""))

    async def _execute_tool(self, request: ToolCallRequest) -> str:
        tool = self.tool_executor.find(request.function_name)
        if tool is None:
            self.logger.warning(f"Model requested unknown tool: {request.function_name}")
            return INVALID_TOOL_MESSAGE

        self.logger.debug(
            f"tool_call: {request.function_name}, {self._redact(request.arguments_json)}"
        )
        self._push_message(Message(role="assistant", content=f"Used the tool {tool.name}"))

        return await self.tool_executor.execute(tool, request)

    def _push_message(self, message: Message) -> None:
        logged = {"role": message.role, "content": self._redact(message.content)}
        self.logger.debug(f"Message: {self._redact(json.dumps(logged, ensure_ascii=False))}")
        self._messages.append(message)

    def _redact(self, text: str) -> str:
        return redact(text, self.secrets.values())
