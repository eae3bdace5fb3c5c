"""Tool handlers.

Each handler validates its parameters, makes one Open-Meteo request and turns
the result into text. Failures come back as error results; nothing here keeps
state between calls.
"""

import logging
from typing import Optional

from mcp.types import CallToolResult, TextContent

from openmeteo_weather_mcp.client import OpenMeteoClient
from openmeteo_weather_mcp.errors import ParameterError, WeatherToolError
from openmeteo_weather_mcp.formatting import (
    format_current_weather,
    format_historical_weather,
    format_locations,
    format_weather_forecast,
)
from openmeteo_weather_mcp.location import search_locations as search_geocoding
from openmeteo_weather_mcp.validation import (
    DEFAULT_FORECAST_DAYS,
    DEFAULT_SEARCH_LIMIT,
    validate_coordinates,
    validate_forecast_request,
    validate_historical_request,
    validate_location_query,
)
from openmeteo_weather_mcp.weather import WeatherService

logger = logging.getLogger("openmeteo_weather.tools")


def success_result(text: str) -> CallToolResult:
    return CallToolResult(content=[TextContent(type="text", text=text)])


def error_result(message: str) -> CallToolResult:
    return CallToolResult(content=[TextContent(type="text", text=message)], isError=True)


def _invalid(error: ParameterError) -> CallToolResult:
    logger.error(f"Invalid parameters: {str(error)}")
    return error_result(str(error))


def _failed(action: str, error: WeatherToolError) -> CallToolResult:
    message = f"Error retrieving {action}: {str(error)}"
    logger.error(message)
    return error_result(message)


async def get_current_weather(client: OpenMeteoClient, latitude: float, longitude: float) -> CallToolResult:
    logger.info(f"Getting current weather for ({latitude}, {longitude})")

    try:
        coordinates = validate_coordinates(latitude, longitude)
    except ParameterError as e:
        return _invalid(e)

    try:
        snapshot = await WeatherService(client).get_current_weather(coordinates)
    except WeatherToolError as e:
        return _failed("current weather", e)

    logger.info("Successfully retrieved current weather")
    return success_result(format_current_weather(snapshot, coordinates))


async def get_weather_forecast(
    client: OpenMeteoClient, latitude: float, longitude: float, days: Optional[int] = DEFAULT_FORECAST_DAYS
) -> CallToolResult:
    logger.info(f"Getting {days}-day weather forecast for ({latitude}, {longitude})")

    try:
        request = validate_forecast_request(latitude, longitude, days)
    except ParameterError as e:
        return _invalid(e)

    try:
        forecast = await WeatherService(client).get_forecast(request)
    except WeatherToolError as e:
        return _failed("weather forecast", e)

    logger.info(f"Successfully retrieved weather forecast for {request.days} days")
    return success_result(format_weather_forecast(forecast, request))


async def get_historical_weather(
    client: OpenMeteoClient, latitude: float, longitude: float, start_date: str, end_date: str
) -> CallToolResult:
    logger.info(f"Getting historical weather for ({latitude}, {longitude}) from {start_date} to {end_date}")

    try:
        request = validate_historical_request(latitude, longitude, start_date, end_date)
    except ParameterError as e:
        return _invalid(e)

    try:
        summary = await WeatherService(client).get_historical_weather(request)
    except WeatherToolError as e:
        return _failed("historical weather", e)

    logger.info(f"Successfully retrieved historical weather data ({len(summary.days)} days)")
    return success_result(format_historical_weather(summary))


async def search_locations(
    client: OpenMeteoClient, query: str, limit: Optional[int] = DEFAULT_SEARCH_LIMIT
) -> CallToolResult:
    logger.info(f"Searching locations for '{query}' (limit {limit})")

    try:
        location_query = validate_location_query(query, limit)
    except ParameterError as e:
        return _invalid(e)

    try:
        matches = await search_geocoding(client, location_query)
    except WeatherToolError as e:
        message = f"Error searching locations: {str(e)}"
        logger.error(message)
        return error_result(message)

    logger.info("Successfully searched locations")
    return success_result(format_locations(matches))
