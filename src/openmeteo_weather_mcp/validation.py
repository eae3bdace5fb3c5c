"""Tool parameter validation.

Everything here runs before Open-Meteo is contacted: a request that fails
validation never reaches the network.
"""

import math
from datetime import date, datetime
from typing import Optional

from openmeteo_weather_mcp.errors import (
    InvalidCoordinate,
    InvalidDateFormat,
    InvalidDateRange,
    InvalidParameter,
)
from openmeteo_weather_mcp.models import Coordinates, ForecastRequest, HistoricalRequest, LocationQuery

DEFAULT_FORECAST_DAYS = 7
MIN_FORECAST_DAYS = 1
MAX_FORECAST_DAYS = 16

DEFAULT_SEARCH_LIMIT = 10
MIN_SEARCH_LIMIT = 1
MAX_SEARCH_LIMIT = 100

DATE_FORMAT = "%Y-%m-%d"


def validate_coordinates(latitude: float, longitude: float) -> Coordinates:
    if not math.isfinite(latitude) or not -90 <= latitude <= 90:
        raise InvalidCoordinate(f"Invalid latitude: {latitude}. Must be between -90 and 90.")
    if not math.isfinite(longitude) or not -180 <= longitude <= 180:
        raise InvalidCoordinate(f"Invalid longitude: {longitude}. Must be between -180 and 180.")
    return Coordinates(latitude=latitude, longitude=longitude)


def _validate_int_range(name: str, value: int, minimum: int, maximum: int) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidParameter(f"Invalid {name}: {value!r}. Must be an integer between {minimum} and {maximum}.")
    if not minimum <= value <= maximum:
        raise InvalidParameter(f"Invalid {name}: {value}. Must be between {minimum} and {maximum}.")
    return value


def validate_forecast_request(
    latitude: float, longitude: float, days: Optional[int] = DEFAULT_FORECAST_DAYS
) -> ForecastRequest:
    coordinates = validate_coordinates(latitude, longitude)
    if days is None:
        days = DEFAULT_FORECAST_DAYS
    days = _validate_int_range("days", days, MIN_FORECAST_DAYS, MAX_FORECAST_DAYS)
    return ForecastRequest(coordinates=coordinates, days=days)


def parse_date(value: str) -> date:
    """Parse a YYYY-MM-DD calendar date"""
    try:
        return datetime.strptime(value.strip(), DATE_FORMAT).date()
    except (AttributeError, ValueError):
        raise InvalidDateFormat(f"Invalid date format: '{value}'. Expected YYYY-MM-DD.") from None


def validate_historical_request(
    latitude: float, longitude: float, start_date: str, end_date: str
) -> HistoricalRequest:
    coordinates = validate_coordinates(latitude, longitude)
    start = parse_date(start_date)
    end = parse_date(end_date)
    if start > end:
        raise InvalidDateRange(
            f"Invalid date range: start date {start.isoformat()} is after end date {end.isoformat()}."
        )
    return HistoricalRequest(coordinates=coordinates, start_date=start, end_date=end)


def validate_location_query(query: str, limit: Optional[int] = DEFAULT_SEARCH_LIMIT) -> LocationQuery:
    """Split 'city, country' on the first comma and check the result limit"""
    if limit is None:
        limit = DEFAULT_SEARCH_LIMIT
    limit = _validate_int_range("limit", limit, MIN_SEARCH_LIMIT, MAX_SEARCH_LIMIT)

    city, _, country = (query or "").partition(",")
    city = city.strip()
    country = country.strip()
    if not city:
        raise InvalidParameter(
            f"Invalid query: '{query}'. Expected 'city' or 'city, country', e.g. 'Paris, France'."
        )
    return LocationQuery(query=query, city=city, country=country or None, limit=limit)
