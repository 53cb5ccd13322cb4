"""
Tools
=====

A tool is a function the model can ask the agent to call. Each tool has:
- a name and a description (shown to the model)
- input properties, some of them required
- optionally, the names of secrets it needs (API keys and the like)
- an implementation: ``(input, secrets) -> str``, sync or async

How a call goes:
1. The model requests the tool by name with JSON arguments
2. The agent finds the tool and calls ``execute`` with its own secrets
3. The tool checks secrets, then required inputs, then runs the function
4. The string result goes back into the transcript

Example:
    async def lookup(inputs: dict, secrets: dict) -> str:
        return f"Found {inputs['query']}"

    search = Tool(
        "search",
        "Searches the knowledge base",
        {
            "properties": {
                "query": {"type": "string", "description": "Search text", "required": True},
            },
            "secrets": ["SEARCH_API_KEY"],
        },
        lookup,
    )

    result = await search.execute({"query": "python"}, {"SEARCH_API_KEY": "..."})
"""

import asyncio
import inspect
from typing import Any, Mapping

from neuron.errors import ExecutionError, InvalidImplementationError, InvalidSecretsError
from neuron.types import PropertySpec, ToolConfig, ToolFunction, ToolParameters


class Tool:
    """
    A named, schema-validated callable.

    Attributes:
        name: Unique identifier shown to the model
        description: What the tool does (shown to the model)
        config: Input properties and required secret names
    """

    REQUIRED_PROPERTIES = ("name", "description", "config")

    def __init__(
        self,
        name: str,
        description: str,
        config: ToolParameters | Mapping[str, Any] | None,
        implementation: ToolFunction | None = None
    ):
        """
        Create a tool.

        Args:
            name: Tool name, non-empty
            description: Tool description, non-empty
            config: ToolParameters, or a dict with a ``properties`` mapping
                and an optional ``secrets`` list
            implementation: Optional function; can be bound later with
                register_function()

        Raises:
            InvalidImplementationError: If name, description or config is missing
        """
        self.name = name
        self.description = description
        self.config = ToolParameters.coerce(config)
        self._implementation = implementation
        self._validate_config()

    @classmethod
    def from_config(cls, tool_config: ToolConfig) -> "Tool":
        return cls(
            tool_config.name,
            tool_config.description,
            tool_config.config,
            tool_config.implementation,
        )

    @property
    def has_implementation(self) -> bool:
        return self._implementation is not None

    @property
    def required_secrets(self) -> list[str]:
        return list(self.config.secrets or [])

    @property
    def required_properties(self) -> list[str]:
        return [name for name, spec in self.config.properties.items() if spec.required]

    def register_function(self, implementation: ToolFunction | None) -> None:
        """Bind or replace the implementation. The signature is not checked."""
        self._implementation = implementation

    async def execute(
        self,
        input: Mapping[str, Any],
        provided_secrets: Mapping[str, str] | None = None
    ) -> Any:
        """
        Validate and run the tool.

        Args:
            input: Arguments for the tool, keyed by property name
            provided_secrets: Secrets available to the tool

        Returns:
            Whatever the implementation returns (awaited if it is async)

        Raises:
            InvalidSecretsError: A declared secret is missing (all are listed)
            InvalidImplementationError: A required property is missing
            ExecutionError: No implementation, or the implementation failed
        """
        provided_secrets = provided_secrets if provided_secrets is not None else {}

        self._validate_secrets(provided_secrets)
        self._validate_input(input)

        if self._implementation is None:
            raise ExecutionError("No implementation registered")

        implementation = self._implementation
        try:
            # Sync bodies run in a worker thread so the event loop, and any
            # timeout wrapped around this call, keep running while they block
            if inspect.iscoroutinefunction(implementation):
                result = await implementation(input, provided_secrets)
            else:
                result = await asyncio.to_thread(implementation, input, provided_secrets)
                if inspect.isawaitable(result):
                    result = await result
        except Exception as e:
            raise ExecutionError(f"Execution failed: {e}") from e

        return result

    def to_openai_function(self) -> dict:
        """
        Convert to OpenAI function calling format.

        Returns:
            {"type": "function", "function": {name, description, parameters}}
        """
        properties = {
            name: {"type": spec.type, "description": spec.description}
            for name, spec in self.config.properties.items()
        }

        return {
            "type": "function",
            "function": {
                "name": self.name,
                "description": self.description,
                "parameters": {
                    "type": "object",
                    "properties": properties,
                    "required": self.required_properties,
                },
            },
        }

    def _validate_config(self) -> None:
        # An empty properties mapping is fine, a missing config is not
        values = (
            _is_text(self.name),
            _is_text(self.description),
            self.config is not None,
        )
        missing = [
            key for key, value in zip(self.REQUIRED_PROPERTIES, values) if not value
        ]

        if missing:
            raise InvalidImplementationError(
                f"Missing required properties: {', '.join(missing)}"
            )

    def _validate_secrets(self, provided_secrets: Mapping[str, str]) -> None:
        if not self.config.secrets:
            return

        missing = [name for name in self.config.secrets if name not in provided_secrets]
        if missing:
            raise InvalidSecretsError(f"Missing required secrets: {', '.join(missing)}")

    def _validate_input(self, input: Mapping[str, Any]) -> None:
        for name, spec in self.config.properties.items():
            if spec.required and name not in input:
                raise InvalidImplementationError(f"Missing required property: {name}")

    def __repr__(self) -> str:
        return f"Tool(name={self.name!r})"


def _is_text(value: Any) -> bool:
    return isinstance(value, str) and bool(value.strip())


__all__ = [
    "Tool",
    "PropertySpec",
    "ToolParameters",
    "ToolConfig",
]
