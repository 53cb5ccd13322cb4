"""
Tool Executor
=============

Runs the tool a model asked for on behalf of an agent.

The executor:
1. Finds the requested tool by exact name (first registered match wins)
2. Parses the JSON arguments the model sent
3. Runs the tool with the agent's secrets, bounded by an optional timeout
4. Turns the tool's return value into transcript text

Only one tool call is run per turn; the agent hands over the first request
and ignores the rest.
"""

import asyncio
import json
from typing import Any, Mapping

from neuron.errors import ExecutionError
from neuron.tools import Tool
from neuron.types import ToolCallRequest
from neuron.utils.logger import LoggerLike


class ToolExecutor:
    """
    Resolves and runs tool calls against an agent's tool list.

    The tool list is shared with the agent, so tools registered later are
    visible here without re-creating the executor.

    Example:
        executor = ToolExecutor(tools, secrets, logger)

        tool = executor.find(request.function_name)
        if tool:
            text = await executor.execute(tool, request)
    """

    def __init__(
        self,
        tools: list[Tool],
        secrets: Mapping[str, str],
        logger: LoggerLike,
        timeout: float | None = None
    ):
        """
        Args:
            tools: The agent's tool list (kept by reference)
            secrets: Secrets passed to every tool
            logger: Logger for tool activity
            timeout: Seconds before a tool call is abandoned
        """
        self.tools = tools
        self.secrets = secrets
        self.logger = logger
        self.timeout = timeout

    def find(self, name: str) -> Tool | None:
        """Return the first tool registered under ``name``, or None."""
        return next((tool for tool in self.tools if tool.name == name), None)

    def schemas(self) -> list[dict]:
        """Tool schemas in OpenAI function format, in registration order."""
        return [tool.to_openai_function() for tool in self.tools]

    def parse_arguments(self, request: ToolCallRequest) -> dict[str, Any]:
        """
        Parse the model's JSON arguments.

        An empty string means no arguments.

        Raises:
            ExecutionError: If the arguments are not a JSON object
        """
        raw = (request.arguments_json or "").strip()
        if not raw:
            return {}

        try:
            arguments = json.loads(raw)
        except json.JSONDecodeError as e:
            raise ExecutionError(
                f"Invalid arguments for tool {request.function_name}: {e}"
            ) from e

        if not isinstance(arguments, dict):
            raise ExecutionError(
                f"Invalid arguments for tool {request.function_name}: expected a JSON object"
            )
        return arguments

    async def execute(self, tool: Tool, request: ToolCallRequest) -> str:
        """
        Run ``tool`` for ``request`` and return transcript text.

        Returns:
            The tool output; non-string values are JSON encoded and a falsy
            result becomes an empty string

        Raises:
            ExecutionError: Bad arguments, timeout, or the tool failed
            InvalidImplementationError: A required property is missing
            InvalidSecretsError: A secret the tool needs is missing
        """
        arguments = self.parse_arguments(request)

        self.logger.info(f"Executing tool: {tool.name}")

        call = tool.execute(arguments, self.secrets)
        if self.timeout is not None:
            try:
                output = await asyncio.wait_for(call, self.timeout)
            except asyncio.TimeoutError as e:
                raise ExecutionError(
                    f"Tool {tool.name} timed out after {self.timeout} seconds"
                ) from e
        else:
            output = await call

        self.logger.debug(f"Tool {tool.name} succeeded")
        return self.format_output(output)

    @staticmethod
    def format_output(output: Any) -> str:
        if not output:
            return ""
        if isinstance(output, str):
            return output
        return json.dumps(output, default=str)
