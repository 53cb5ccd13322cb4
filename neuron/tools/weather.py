"""
Weather Tool
============

Fetches a forecast from the US National Weather Service (api.weather.gov).

Two requests per call:
    GET /points/{lat},{lon}        → properties.forecast (a URL)
    GET <forecast URL>             → properties.periods[0].detailedForecast

weather.gov needs no API key but asks every client to send a User-Agent that
identifies it.
"""

import httpx

from neuron.tools import Tool
from neuron.utils.logger import Logger

logger = Logger("WeatherTool")

WEATHER_GOV_API = "https://api.weather.gov"

USER_AGENT = "neuron-weather-agent"

WEATHER_TOOL_PARAMETERS = {
    "properties": {
        "latitude": {
            "type": "string",
            "description": "latitude of the location where weather data is required",
            "required": True,
        },
        "longitude": {
            "type": "string",
            "description": "longitude of the location where weather data is required",
            "required": True,
        },
        "locationName": {
            "type": "string",
            "description": "name of the location where weather data is required",
            "required": True,
        },
    },
}


def create_weather_tool(transport: httpx.AsyncBaseTransport | None = None) -> Tool:
    """
    Build the ``weather_gov_query`` tool.

    Args:
        transport: Optional httpx transport, e.g. httpx.MockTransport in tests

    Returns:
        A Tool with its implementation bound
    """

    async def query_weather_gov(inputs: dict, secrets: dict) -> str:
        latitude = inputs["latitude"]
        longitude = inputs["longitude"]
        location = inputs["locationName"]

        async with httpx.AsyncClient(
            base_url=WEATHER_GOV_API,
            headers={"User-Agent": USER_AGENT, "Accept": "application/geo+json"},
            transport=transport,
        ) as client:
            points = await client.get(f"/points/{latitude},{longitude}")
            points.raise_for_status()
            forecast_url = points.json()["properties"]["forecast"]

            forecast = await client.get(forecast_url)
            forecast.raise_for_status()
            periods = forecast.json()["properties"]["periods"]

        if not periods:
            raise ValueError(f"No forecast periods returned for {location}")

        logger.debug(f"Fetched forecast for {location}")
        return f"Weather forecast in {location} is {periods[0]['detailedForecast']}"

    return Tool(
        "weather_gov_query",
        "Fetches real-time weather data from weather.gov.",
        WEATHER_TOOL_PARAMETERS,
        query_weather_gov,
    )


__all__ = ["create_weather_tool", "WEATHER_TOOL_PARAMETERS"]
