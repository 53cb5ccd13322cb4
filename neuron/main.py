"""
Neuron - Command Line Entry Point
=================================

Runs the weather agent on a single question:

1. Loads configuration (.env + environment)
2. Builds the weather agent and registers the weather.gov tool
3. Runs the agent loop and prints the answer

Run with:
    python -m neuron.main "I'm travelling to Tahoe, what is the weather there?"

Or after installing:
    neuron "What's the weather in Boston?"
"""

import asyncio
import sys

from neuron.agent import Agent, AgentConfig
from neuron.tools.weather import create_weather_tool
from neuron.utils.config import Config, get_config
from neuron.utils.logger import Logger, parse_log_level

main_logger = Logger("Main")

DEFAULT_QUESTION = "I'm travelling to Tahoe, what is the weather there?"

WEATHER_PERSONA = (
    "You are a cheerful and approachable virtual assistant dedicated to delivering "
    "accurate, concise, and engaging weather updates. Your tone is warm, lively, and "
    "always focused on making weather information easy to understand and fun to receive."
)

WEATHER_GOAL = (
    "Provide the current weather for a specified location as soon as the city or "
    "location details are provided. Your response should be both informative and "
    "conversational, ensuring clarity and usefulness for the user."
)


def build_weather_agent(config: Config) -> Agent:
    """Create the weather agent from configuration."""
    logger = Logger("Agent:WeatherAgent", parse_log_level(config.log_level))

    agent = Agent(
        "WeatherAgent",
        AgentConfig(
            persona=WEATHER_PERSONA,
            goal=WEATHER_GOAL,
            secrets=config.secrets(),
            provider=config.agent.provider,
            model=config.openai.model,
            max_iterations=config.agent.max_iterations,
            logger=logger,
            llm_timeout=config.openai.timeout,
            tool_timeout=config.agent.tool_timeout,
        ),
    )
    agent.register_tool(create_weather_tool())
    return agent


async def main(question: str) -> str:
    """Answer one question with the weather agent."""
    main_logger.info("Loading configuration...")
    config = get_config()

    agent = build_weather_agent(config)

    main_logger.info("Running agent...")
    return await agent.execute(question)


def run():
    """
    Synchronous entry point for the ``neuron`` command.

    Exits with status 1 when configuration is missing or invalid.
    """
    question = " ".join(sys.argv[1:]) or DEFAULT_QUESTION

    try:
        result = asyncio.run(main(question))
    except KeyboardInterrupt:
        return
    except Exception as e:
        main_logger.error("Failed to run agent", e)
        sys.exit(1)

    print("RESULT:", result)


if __name__ == "__main__":
    run()
