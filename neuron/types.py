"""
Shared Types
============

Plain dataclasses passed between the agent, the tools and the model gateway.

Message flow:
    Agent transcript (Message)  ──►  LLM.call  ──►  LLMResult
                                                      │
                           ┌──────────────────────────┴───┐
                           ▼                              ▼
                  tool_calls (ToolCallRequest)     content (AgentResponse)
"""

from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable, Literal, Mapping

from neuron.errors import InvalidImplementationError

Role = Literal["system", "user", "assistant"]

ROLES: tuple[str, ...] = ("system", "user", "assistant")

Provider = Literal["openai", "anthropic", "google"]

# Every provider the gateway knows about. Only openai has a real backend.
PROVIDERS: tuple[str, ...] = ("openai", "anthropic", "google")

DEFAULT_PROVIDER: Provider = "openai"

# A tool body: (input, secrets) -> str, optionally async
ToolFunction = Callable[[dict[str, Any], dict[str, str]], "str | Awaitable[str] | Any"]


@dataclass
class Message:
    """
    A single transcript entry.

    Attributes:
        role: "system", "user" or "assistant"
        content: The message text
    """
    role: Role
    content: str

    def to_dict(self) -> dict:
        """Convert to the chat completion message format."""
        return {"role": self.role, "content": self.content}

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Message":
        """
        Build from a ``{"role", "content"}`` mapping.

        Raises:
            InvalidImplementationError: Unknown role or non-string content
        """
        if not isinstance(data, Mapping):
            raise InvalidImplementationError(
                f"Message must be a mapping, got {type(data).__name__}"
            )
        role = data.get("role")
        if role not in ROLES:
            raise InvalidImplementationError(
                f"Message role must be one of: {', '.join(ROLES)} (got {role!r})"
            )
        content = data.get("content")
        if content is None:
            content = ""
        if not isinstance(content, str):
            raise InvalidImplementationError("Message content must be a string")
        return cls(role=role, content=content)


@dataclass
class PropertySpec:
    """
    One input property a tool accepts.

    Attributes:
        type: JSON schema type name ("string", "number", ...)
        description: Shown to the model
        required: Whether the tool refuses to run without it
    """
    type: str
    description: str
    required: bool = False

    @classmethod
    def coerce(cls, value: "PropertySpec | Mapping[str, Any]") -> "PropertySpec":
        """
        Accept either a PropertySpec or a plain dict.

        Raises:
            InvalidImplementationError: For anything else
        """
        if isinstance(value, PropertySpec):
            return value
        if not isinstance(value, Mapping):
            raise InvalidImplementationError(
                f"Property spec must be a mapping, got {type(value).__name__}"
            )
        return cls(
            type=value.get("type", "string"),
            description=value.get("description", ""),
            required=bool(value.get("required", False)),
        )


@dataclass
class ToolParameters:
    """
    The callable surface of a tool: its input properties and the secrets it
    needs at call time.
    """
    properties: dict[str, PropertySpec] = field(default_factory=dict)
    secrets: list[str] | None = None

    def __post_init__(self):
        self.properties = {
            name: PropertySpec.coerce(spec)
            for name, spec in (self.properties or {}).items()
        }
        if self.secrets is not None:
            self.secrets = list(self.secrets)

    @classmethod
    def coerce(cls, value: Any) -> "ToolParameters | None":
        """
        Normalize a config given as ToolParameters or a dict.

        Returns None when the value carries no ``properties`` mapping, so the
        caller can report it as missing.
        """
        if value is None or isinstance(value, ToolParameters):
            return value
        if isinstance(value, Mapping) and isinstance(value.get("properties"), Mapping):
            return cls(properties=dict(value["properties"]), secrets=value.get("secrets"))
        return None


@dataclass
class ToolConfig:
    """Declarative tool entry, turned into a Tool when an Agent is built."""
    name: str
    description: str
    config: ToolParameters | Mapping[str, Any] | None
    implementation: ToolFunction | None = None


@dataclass
class AgentResponse:
    """
    The structured content of one model turn.

    The model answers in JSON using camelCase keys:
        while working:   {"thoughtProcess": "...", "stop": false}
        when finished:   {"output": "...", "stop": true}
    """
    thought_process: str | None = None
    output: str | None = None
    stop: bool = False

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "AgentResponse":
        """Build from the model's parsed JSON; unknown keys are ignored."""
        return cls(
            thought_process=_as_text(data.get("thoughtProcess")),
            output=_as_text(data.get("output")),
            stop=data.get("stop") is True,
        )


@dataclass
class ToolCallRequest:
    """
    A tool invocation requested by the model.

    Attributes:
        function_name: Name matched against the registered tools
        arguments_json: Raw JSON arguments string as sent by the model
        id: Provider call ID, when there is one
    """
    function_name: str
    arguments_json: str = ""
    id: str | None = None


@dataclass
class LLMResult:
    """
    What the gateway returns for one model call.

    Either ``tool_calls`` is populated (the model wants a tool) or ``content``
    holds the structured turn. ``error`` names the error class when the
    gateway degraded a failure into this result.
    """
    tool_calls: list[ToolCallRequest] | None = None
    content: AgentResponse | None = None
    error: str | None = None

    @property
    def is_error(self) -> bool:
        return self.error is not None

    @property
    def stop(self) -> bool:
        return bool(self.content and self.content.stop)

    @property
    def output(self) -> str | None:
        return self.content.output if self.content else None


def _as_text(value: Any) -> str | None:
    if value is None or isinstance(value, str):
        return value
    return str(value)


__all__ = [
    "Role",
    "ROLES",
    "Provider",
    "PROVIDERS",
    "DEFAULT_PROVIDER",
    "ToolFunction",
    "Message",
    "PropertySpec",
    "ToolParameters",
    "ToolConfig",
    "AgentResponse",
    "ToolCallRequest",
    "LLMResult",
]
