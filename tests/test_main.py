"""Tests for the command line entry point."""

from neuron.llm import LLM
from neuron.main import WEATHER_GOAL, build_weather_agent
from neuron.utils.config import AgentDefaults, Config, OpenAIConfig


def test_build_weather_agent():
    config = Config(
        openai=OpenAIConfig(api_key="sk-test", model="gpt-4o-mini", timeout=20),
        agent=AgentDefaults(max_iterations=5, tool_timeout=10),
    )

    agent = build_weather_agent(config)

    assert agent.name == "WeatherAgent"
    assert agent.max_iterations == 5
    assert [tool.name for tool in agent.tools] == ["weather_gov_query"]
    assert isinstance(agent.llm, LLM)
    assert agent.llm.model == "gpt-4o-mini"
    assert agent.tool_executor.timeout == 10
    assert WEATHER_GOAL in agent.prompt
