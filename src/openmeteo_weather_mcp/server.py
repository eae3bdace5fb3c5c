import logging
import sys
from contextlib import asynccontextmanager
from typing import Annotated, AsyncIterator, Optional

from dotenv import load_dotenv
from mcp.server.fastmcp import FastMCP
from mcp.types import CallToolResult
from pydantic import Field

from openmeteo_weather_mcp import tools
from openmeteo_weather_mcp.client import OpenMeteoClient
from openmeteo_weather_mcp.config import config
from openmeteo_weather_mcp.validation import DEFAULT_FORECAST_DAYS, DEFAULT_SEARCH_LIMIT

# Proxy settings and the like in .env reach httpx through the environment
load_dotenv()

logger = logging.getLogger("openmeteo_weather")

INSTRUCTIONS = """This server provides tools to interact with the OpenMeteo Weather API for weather data and forecasts.
Available tools:
- 'get_current_weather': Get current weather conditions for a specific location. Requires 'latitude' and 'longitude' parameters.
- 'get_weather_forecast': Get weather forecast for a specific location. Requires 'latitude' and 'longitude' parameters. Optional 'days' parameter (1-16, defaults to 7).
- 'get_historical_weather': Get historical weather data for a specific location and date range. Requires 'latitude', 'longitude', 'start_date', and 'end_date' parameters (dates in YYYY-MM-DD format).
- 'search_locations': Search for locations by name to get their coordinates. Requires 'query' parameter in format 'city, country' (country is optional, e.g., 'Paris, France' or 'Tokyo'). Optional 'limit' parameter (1-100, defaults to 10).

Coordinates must be valid: latitude between -90 and 90, longitude between -180 and 180.
All weather data is provided by OpenMeteo (https://open-meteo.com/) and is free to use."""

LATITUDE_DESCRIPTION = "Latitude coordinate (-90 to 90)"
LONGITUDE_DESCRIPTION = "Longitude coordinate (-180 to 180)"


def setup_logging(level: str = "INFO") -> None:
    """Log to stderr; stdout carries the MCP stdio transport"""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler(sys.stderr)],
        force=True,
    )


# Shared by every tool call; owns the HTTP connection pool
weather_client = OpenMeteoClient()


@asynccontextmanager
async def lifespan(server: FastMCP) -> AsyncIterator[None]:
    try:
        yield
    finally:
        await weather_client.aclose()


mcp = FastMCP("OpenMeteo Weather", instructions=INSTRUCTIONS, lifespan=lifespan)


# Tools
@mcp.tool(
    name="get_current_weather",
    description="Get current weather conditions for a specific location. Returns real-time weather data "
    "including temperature, humidity, precipitation, wind, and atmospheric conditions.",
)
async def get_current_weather(
    latitude: Annotated[float, Field(description=LATITUDE_DESCRIPTION)],
    longitude: Annotated[float, Field(description=LONGITUDE_DESCRIPTION)],
) -> CallToolResult:
    return await tools.get_current_weather(weather_client, latitude, longitude)


@mcp.tool(
    name="get_weather_forecast",
    description="Get weather forecast for a specific location. Returns detailed forecast data for up to 16 days "
    "including daily temperature, precipitation, wind, and weather conditions.",
)
async def get_weather_forecast(
    latitude: Annotated[float, Field(description=LATITUDE_DESCRIPTION)],
    longitude: Annotated[float, Field(description=LONGITUDE_DESCRIPTION)],
    days: Annotated[
        Optional[int], Field(description="Number of forecast days (1-16, default: 7)")
    ] = DEFAULT_FORECAST_DAYS,
) -> CallToolResult:
    return await tools.get_weather_forecast(weather_client, latitude, longitude, days)


@mcp.tool(
    name="get_historical_weather",
    description="Get historical weather data for a specific location and date range. Returns daily weather "
    "statistics including temperature, precipitation, and other meteorological data for analysis.",
)
async def get_historical_weather(
    latitude: Annotated[float, Field(description=LATITUDE_DESCRIPTION)],
    longitude: Annotated[float, Field(description=LONGITUDE_DESCRIPTION)],
    start_date: Annotated[str, Field(description="Start date (YYYY-MM-DD)")],
    end_date: Annotated[str, Field(description="End date (YYYY-MM-DD)")],
) -> CallToolResult:
    return await tools.get_historical_weather(weather_client, latitude, longitude, start_date, end_date)


@mcp.tool(
    name="search_locations",
    description="Search for locations by name to get their coordinates and details. Use format 'city, country' "
    "where country is optional (e.g., 'Paris, France' or just 'Tokyo'). Returns a list of matching locations "
    "with coordinates and other geographic information.",
)
async def search_locations(
    query: Annotated[
        str,
        Field(
            description="Location search query in format 'city, country' (country is optional). "
            "Examples: 'Paris, France', 'Tokyo', 'New York, USA'"
        ),
    ],
    limit: Annotated[
        Optional[int], Field(description="Maximum number of results (1-100, default: 10)")
    ] = DEFAULT_SEARCH_LIMIT,
) -> CallToolResult:
    return await tools.search_locations(weather_client, query, limit)


def main() -> None:
    setup_logging(config.log_level)
    logger.info("Starting OpenMeteo MCP Server...")
    logger.info("Using stdio transport")
    mcp.run("stdio")


if __name__ == "__main__":
    main()
