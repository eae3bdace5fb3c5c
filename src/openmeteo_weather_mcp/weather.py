import logging
from typing import Any, Dict, List, Optional, Tuple

import pandas as pd

from openmeteo_weather_mcp.client import ARCHIVE_URL, FORECAST_URL, OpenMeteoClient
from openmeteo_weather_mcp.errors import FormattingError, UpstreamError
from openmeteo_weather_mcp.formatting import describe_weather_code
from openmeteo_weather_mcp.models import (
    Coordinates,
    ForecastDay,
    ForecastRequest,
    HistoricalDay,
    HistoricalRequest,
    HistoricalSummary,
    WeatherSnapshot,
)

logger = logging.getLogger("openmeteo_weather.weather")

CURRENT_PARAMS = [
    "temperature_2m",
    "relative_humidity_2m",
    "apparent_temperature",
    "is_day",
    "precipitation",
    "rain",
    "showers",
    "snowfall",
    "weather_code",
    "cloud_cover",
    "pressure_msl",
    "surface_pressure",
    "wind_speed_10m",
    "wind_direction_10m",
    "wind_gusts_10m",
]

FORECAST_DAILY_PARAMS = [
    "weather_code",
    "temperature_2m_max",
    "temperature_2m_min",
    "apparent_temperature_max",
    "apparent_temperature_min",
    "sunrise",
    "sunset",
    "daylight_duration",
    "sunshine_duration",
    "uv_index_max",
    "precipitation_sum",
    "precipitation_probability_max",
    "wind_speed_10m_max",
    "wind_gusts_10m_max",
    "wind_direction_10m_dominant",
]

HISTORICAL_DAILY_PARAMS = [
    "weather_code",
    "temperature_2m_max",
    "temperature_2m_min",
    "temperature_2m_mean",
    "precipitation_sum",
]

# Open-Meteo unit keys for the display units used by the formatter
CURRENT_UNIT_FIELDS = {
    "temperature": "temperature_2m",
    "humidity": "relative_humidity_2m",
    "precipitation": "precipitation",
    "snowfall": "snowfall",
    "wind_speed": "wind_speed_10m",
    "pressure": "pressure_msl",
    "cloud_cover": "cloud_cover",
}

DAILY_UNIT_FIELDS = {
    "temperature": "temperature_2m_max",
    "precipitation": "precipitation_sum",
    "wind_speed": "wind_speed_10m_max",
    "probability": "precipitation_probability_max",
}


def _require(data: Dict[str, Any], key: str) -> Any:
    value = data.get(key)
    if value is None:
        raise FormattingError(key)
    return value


def _number(value: Any) -> Optional[float]:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    return float(value)


def _text(value: Any) -> Optional[str]:
    return value if isinstance(value, str) and value else None


def _code(value: Any) -> Optional[int]:
    number = _number(value)
    return int(number) if number is not None else None


def _units(raw_units: Any, fields: Dict[str, str]) -> Dict[str, str]:
    if not isinstance(raw_units, dict):
        return {}
    return {key: str(raw_units[field]) for key, field in fields.items() if raw_units.get(field)}


def _column(daily: Dict[str, Any], key: str, index: int) -> Any:
    values = daily.get(key)
    if not isinstance(values, list) or index >= len(values):
        return None
    return values[index]


def _daily_times(data: Dict[str, Any]) -> Tuple[Dict[str, Any], List[Any]]:
    daily = _require(data, "daily")
    if not isinstance(daily, dict):
        raise FormattingError("daily")
    times = _require(daily, "time")
    if not isinstance(times, list):
        raise FormattingError("daily.time")
    return daily, times


def parse_current_weather(data: Dict[str, Any]) -> WeatherSnapshot:
    current = _require(data, "current")
    if not isinstance(current, dict):
        raise FormattingError("current")

    code = _code(current.get("weather_code"))
    is_day = _code(current.get("is_day"))
    return WeatherSnapshot(
        time=_text(current.get("time")),
        temperature=_number(current.get("temperature_2m")),
        apparent_temperature=_number(current.get("apparent_temperature")),
        humidity=_number(current.get("relative_humidity_2m")),
        precipitation=_number(current.get("precipitation")),
        rain=_number(current.get("rain")),
        showers=_number(current.get("showers")),
        snowfall=_number(current.get("snowfall")),
        wind_speed=_number(current.get("wind_speed_10m")),
        wind_direction=_number(current.get("wind_direction_10m")),
        wind_gusts=_number(current.get("wind_gusts_10m")),
        pressure=_number(current.get("pressure_msl")),
        surface_pressure=_number(current.get("surface_pressure")),
        cloud_cover=_number(current.get("cloud_cover")),
        weather_code=code,
        description=describe_weather_code(code),
        is_day=None if is_day is None else is_day == 1,
        units=_units(data.get("current_units"), CURRENT_UNIT_FIELDS),
    )


def parse_forecast(data: Dict[str, Any]) -> List[ForecastDay]:
    daily, times = _daily_times(data)
    units = _units(data.get("daily_units"), DAILY_UNIT_FIELDS)

    days = []
    for i, day in enumerate(times):
        code = _code(_column(daily, "weather_code", i))
        days.append(
            ForecastDay(
                date=str(day),
                temperature_max=_number(_column(daily, "temperature_2m_max", i)),
                temperature_min=_number(_column(daily, "temperature_2m_min", i)),
                apparent_temperature_max=_number(_column(daily, "apparent_temperature_max", i)),
                apparent_temperature_min=_number(_column(daily, "apparent_temperature_min", i)),
                weather_code=code,
                description=describe_weather_code(code),
                precipitation_sum=_number(_column(daily, "precipitation_sum", i)),
                precipitation_probability=_number(_column(daily, "precipitation_probability_max", i)),
                wind_speed_max=_number(_column(daily, "wind_speed_10m_max", i)),
                wind_gusts_max=_number(_column(daily, "wind_gusts_10m_max", i)),
                wind_direction_dominant=_number(_column(daily, "wind_direction_10m_dominant", i)),
                sunrise=_text(_column(daily, "sunrise", i)),
                sunset=_text(_column(daily, "sunset", i)),
                uv_index_max=_number(_column(daily, "uv_index_max", i)),
                daylight_duration=_number(_column(daily, "daylight_duration", i)),
                sunshine_duration=_number(_column(daily, "sunshine_duration", i)),
                units=units,
            )
        )
    return days


def _optional(value: Any) -> Optional[float]:
    return None if pd.isna(value) else float(value)


def summarize_history(
    days: List[HistoricalDay], request: HistoricalRequest, units: Optional[Dict[str, str]] = None
) -> HistoricalSummary:
    """Aggregate the full daily series; missing values are skipped"""
    summary = HistoricalSummary(
        coordinates=request.coordinates,
        start_date=request.start_date,
        end_date=request.end_date,
        days=days,
        units=units or {},
    )
    if not days:
        return summary

    frame = pd.DataFrame([day.model_dump() for day in days]).set_index("date")
    columns = ["temperature_max", "temperature_min", "temperature_mean", "precipitation_sum"]
    frame[columns] = frame[columns].apply(pd.to_numeric, errors="coerce")

    summary.day_count = int(frame[columns].notna().any(axis=1).sum())

    highs = frame["temperature_max"].dropna()
    if not highs.empty:
        summary.highest_max = float(highs.max())
        summary.highest_max_date = str(highs.idxmax())
        summary.mean_max = float(highs.mean())

    lows = frame["temperature_min"].dropna()
    if not lows.empty:
        summary.lowest_min = float(lows.min())
        summary.lowest_min_date = str(lows.idxmin())
        summary.mean_min = float(lows.mean())

    summary.mean_temperature = _optional(frame["temperature_mean"].mean())

    precipitation = frame["precipitation_sum"].dropna()
    if not precipitation.empty:
        summary.total_precipitation = float(precipitation.sum())
        summary.mean_precipitation = float(precipitation.mean())

    return summary


def parse_historical(data: Dict[str, Any], request: HistoricalRequest) -> HistoricalSummary:
    daily, times = _daily_times(data)

    days = []
    for i, day in enumerate(times):
        code = _code(_column(daily, "weather_code", i))
        days.append(
            HistoricalDay(
                date=str(day),
                temperature_max=_number(_column(daily, "temperature_2m_max", i)),
                temperature_min=_number(_column(daily, "temperature_2m_min", i)),
                temperature_mean=_number(_column(daily, "temperature_2m_mean", i)),
                precipitation_sum=_number(_column(daily, "precipitation_sum", i)),
                weather_code=code,
                description=describe_weather_code(code),
            )
        )
    return summarize_history(days, request, _units(data.get("daily_units"), DAILY_UNIT_FIELDS))


class WeatherService:
    """Service for fetching and processing Open-Meteo weather data"""

    def __init__(self, client: OpenMeteoClient):
        self.client = client

    async def get_current_weather(self, coordinates: Coordinates) -> WeatherSnapshot:
        params = {
            "latitude": coordinates.latitude,
            "longitude": coordinates.longitude,
            "current": ",".join(CURRENT_PARAMS),
            "timezone": "auto",
        }
        data = await self.client.get_json(FORECAST_URL, params)
        try:
            return parse_current_weather(data)
        except FormattingError as e:
            logger.error(f"Unusable current weather response: {str(e)}")
            raise UpstreamError(f"Unexpected OpenMeteo response: {str(e)}") from e

    async def get_forecast(self, request: ForecastRequest) -> List[ForecastDay]:
        params = {
            "latitude": request.coordinates.latitude,
            "longitude": request.coordinates.longitude,
            "daily": ",".join(FORECAST_DAILY_PARAMS),
            "forecast_days": request.days,
            "timezone": "auto",
        }
        data = await self.client.get_json(FORECAST_URL, params)
        try:
            return parse_forecast(data)
        except FormattingError as e:
            logger.error(f"Unusable forecast response: {str(e)}")
            raise UpstreamError(f"Unexpected OpenMeteo response: {str(e)}") from e

    async def get_historical_weather(self, request: HistoricalRequest) -> HistoricalSummary:
        params = {
            "latitude": request.coordinates.latitude,
            "longitude": request.coordinates.longitude,
            "start_date": request.start_date.isoformat(),
            "end_date": request.end_date.isoformat(),
            "daily": ",".join(HISTORICAL_DAILY_PARAMS),
            "timezone": "auto",
        }
        data = await self.client.get_json(ARCHIVE_URL, params)
        try:
            return parse_historical(data, request)
        except FormattingError as e:
            logger.error(f"Unusable historical weather response: {str(e)}")
            raise UpstreamError(f"Unexpected OpenMeteo response: {str(e)}") from e
