"""Text reports for the weather tools.

All functions here are pure: the same entity always renders to the same text.
Fields that are ``None`` are left out of the report.
"""

from types import MappingProxyType
from typing import Dict, List, Mapping, Optional

from openmeteo_weather_mcp.models import (
    Coordinates,
    ForecastDay,
    ForecastRequest,
    HistoricalSummary,
    LocationMatch,
    WeatherSnapshot,
)

# WMO weather interpretation codes used by Open-Meteo
WEATHER_CODES: Mapping[int, str] = MappingProxyType(
    {
        0: "clear sky",
        1: "mainly clear",
        2: "partly cloudy",
        3: "overcast",
        45: "fog",
        48: "depositing rime fog",
        51: "light drizzle",
        53: "moderate drizzle",
        55: "dense drizzle",
        56: "light freezing drizzle",
        57: "dense freezing drizzle",
        61: "slight rain",
        63: "moderate rain",
        65: "heavy rain",
        66: "light freezing rain",
        67: "heavy freezing rain",
        71: "slight snow fall",
        73: "moderate snow fall",
        75: "heavy snow fall",
        77: "snow grains",
        80: "slight rain showers",
        81: "moderate rain showers",
        82: "violent rain showers",
        85: "slight snow showers",
        86: "heavy snow showers",
        95: "thunderstorm",
        96: "thunderstorm with slight hail",
        99: "thunderstorm with heavy hail",
    }
)
UNKNOWN_CONDITIONS = "unknown conditions"

DEFAULT_UNITS: Mapping[str, str] = MappingProxyType(
    {
        "temperature": "°C",
        "humidity": "%",
        "precipitation": "mm",
        "snowfall": "cm",
        "wind_speed": "km/h",
        "wind_direction": "°",
        "pressure": "hPa",
        "cloud_cover": "%",
        "probability": "%",
    }
)

HISTORICAL_SAMPLE_DAYS = 5
NO_LOCATIONS_FOUND = "No locations found matching your search query."


def describe_weather_code(code: Optional[int]) -> str:
    if code is None:
        return UNKNOWN_CONDITIONS
    return WEATHER_CODES.get(code, UNKNOWN_CONDITIONS)


def _unit(units: Dict[str, str], key: str) -> str:
    return units.get(key) or DEFAULT_UNITS[key]


def _value(value: float, unit: str, precision: int = 1) -> str:
    return f"{value:.{precision}f}{unit}"


def _duration(seconds: float) -> str:
    minutes = int(round(seconds / 60))
    return f"{minutes // 60}h {minutes % 60:02d}m"


def _location_line(coordinates: Coordinates) -> str:
    return f"Location: {coordinates.latitude:.2f}°, {coordinates.longitude:.2f}°"


def format_current_weather(snapshot: WeatherSnapshot, coordinates: Coordinates) -> str:
    units = snapshot.units
    temp_unit = _unit(units, "temperature")

    lines = ["🌍 Current Weather", _location_line(coordinates), f"Time: {snapshot.time or 'Unknown'}", ""]
    if snapshot.temperature is not None:
        lines.append(f"🌡️ Temperature: {_value(snapshot.temperature, temp_unit)}")
    if snapshot.apparent_temperature is not None:
        lines.append(f"🤔 Feels like: {_value(snapshot.apparent_temperature, temp_unit)}")
    if snapshot.humidity is not None:
        lines.append(f"💧 Humidity: {_value(snapshot.humidity, _unit(units, 'humidity'), 0)}")
    if snapshot.precipitation is not None:
        lines.append(f"☔ Precipitation: {_value(snapshot.precipitation, _unit(units, 'precipitation'))}")
    kinds = [
        f"{label} {_value(amount, _unit(units, unit_key))}"
        for label, amount, unit_key in (
            ("rain", snapshot.rain, "precipitation"),
            ("showers", snapshot.showers, "precipitation"),
            ("snowfall", snapshot.snowfall, "snowfall"),
        )
        if amount is not None
    ]
    if kinds:
        lines.append(f"🌧️ Precipitation by type: {', '.join(kinds)}")
    if snapshot.wind_speed is not None:
        wind = f"💨 Wind: {_value(snapshot.wind_speed, _unit(units, 'wind_speed'))}"
        if snapshot.wind_direction is not None:
            wind += f" from {snapshot.wind_direction:.0f}°"
        if snapshot.wind_gusts is not None:
            wind += f", gusts {_value(snapshot.wind_gusts, _unit(units, 'wind_speed'))}"
        lines.append(wind)
    if snapshot.cloud_cover is not None:
        lines.append(f"🌫️ Cloud cover: {_value(snapshot.cloud_cover, _unit(units, 'cloud_cover'), 0)}")
    pressure_unit = _unit(units, "pressure")
    if snapshot.pressure is not None:
        pressure = f"📊 Pressure: {_value(snapshot.pressure, pressure_unit)}"
        if snapshot.surface_pressure is not None:
            pressure += f" (surface {_value(snapshot.surface_pressure, pressure_unit)})"
        lines.append(pressure)
    elif snapshot.surface_pressure is not None:
        lines.append(f"📊 Surface pressure: {_value(snapshot.surface_pressure, pressure_unit)}")
    lines.append(f"☀️ Conditions: {snapshot.description}")
    if snapshot.is_day is not None:
        lines.append("🌗 Daytime" if snapshot.is_day else "🌗 Nighttime")

    return "\n".join(lines)


def _format_forecast_day(day: ForecastDay) -> List[str]:
    units = day.units
    temp_unit = _unit(units, "temperature")
    wind_unit = _unit(units, "wind_speed")

    lines = [f"📅 {day.date}"]
    if day.temperature_max is not None and day.temperature_min is not None:
        lines.append(f"🌡️ {_value(day.temperature_max, temp_unit)} / {_value(day.temperature_min, temp_unit)}")
    elif day.temperature_max is not None:
        lines.append(f"🌡️ High {_value(day.temperature_max, temp_unit)}")
    elif day.temperature_min is not None:
        lines.append(f"🌡️ Low {_value(day.temperature_min, temp_unit)}")
    feels = [
        _value(value, temp_unit)
        for value in (day.apparent_temperature_max, day.apparent_temperature_min)
        if value is not None
    ]
    if feels:
        lines.append(f"🤔 Feels like {' / '.join(feels)}")
    lines.append(f"☀️ {day.description}")
    if day.precipitation_sum is not None:
        precip = f"☔ {_value(day.precipitation_sum, _unit(units, 'precipitation'))}"
        if day.precipitation_probability is not None:
            precip += f" ({day.precipitation_probability:.0f}{_unit(units, 'probability')} chance)"
        lines.append(precip)
    if day.wind_speed_max is not None:
        wind = f"💨 {_value(day.wind_speed_max, wind_unit)}"
        if day.wind_direction_dominant is not None:
            wind += f" from {day.wind_direction_dominant:.0f}°"
        if day.wind_gusts_max is not None:
            wind += f", gusts {_value(day.wind_gusts_max, wind_unit)}"
        lines.append(wind)
    if day.sunrise or day.sunset:
        lines.append(f"🌅 Sunrise {day.sunrise or 'Unknown'} / Sunset {day.sunset or 'Unknown'}")
    if day.uv_index_max is not None:
        lines.append(f"🔆 UV index: {day.uv_index_max:.1f}")
    if day.daylight_duration is not None:
        lines.append(f"🕐 Daylight: {_duration(day.daylight_duration)}")
    if day.sunshine_duration is not None:
        lines.append(f"🌞 Sunshine: {_duration(day.sunshine_duration)}")
    return lines


def format_weather_forecast(days: List[ForecastDay], request: ForecastRequest) -> str:
    lines = [f"🌍 {request.days}-Day Weather Forecast", _location_line(request.coordinates), ""]
    for day in days[: request.days]:
        lines.extend(_format_forecast_day(day))
        lines.append("")
    return "\n".join(lines)


def format_historical_weather(summary: HistoricalSummary) -> str:
    units = summary.units
    temp_unit = _unit(units, "temperature")
    precip_unit = _unit(units, "precipitation")

    lines = [
        "🌍 Historical Weather Data",
        _location_line(summary.coordinates),
        f"Period: {summary.start_date.isoformat()} to {summary.end_date.isoformat()}",
        "",
    ]

    if summary.day_count:
        lines.append(f"📊 Summary Statistics ({summary.day_count} days):")
        if summary.highest_max is not None:
            lines.append(f"🌡️ Highest: {_value(summary.highest_max, temp_unit)} on {summary.highest_max_date}")
        if summary.lowest_min is not None:
            lines.append(f"🌡️ Lowest: {_value(summary.lowest_min, temp_unit)} on {summary.lowest_min_date}")
        if summary.mean_max is not None:
            lines.append(f"🌡️ Average High: {_value(summary.mean_max, temp_unit)}")
        if summary.mean_min is not None:
            lines.append(f"🌡️ Average Low: {_value(summary.mean_min, temp_unit)}")
        if summary.mean_temperature is not None:
            lines.append(f"🌡️ Average Mean: {_value(summary.mean_temperature, temp_unit)}")
        if summary.total_precipitation is not None:
            lines.append(f"☔ Total Precipitation: {_value(summary.total_precipitation, precip_unit)}")
        if summary.mean_precipitation is not None:
            lines.append(f"☔ Average Daily Precipitation: {_value(summary.mean_precipitation, precip_unit)}")
        lines.append("")
    else:
        lines.append("No daily data available for this period.")
        lines.append("")

    lines.append(f"📅 Daily Data (first {HISTORICAL_SAMPLE_DAYS} days):")
    for day in summary.days[:HISTORICAL_SAMPLE_DAYS]:
        parts = []
        if day.temperature_max is not None:
            parts.append(_value(day.temperature_max, temp_unit))
        if day.temperature_min is not None:
            parts.append(_value(day.temperature_min, temp_unit))
        entry = f"{day.date}: {' / '.join(parts) or 'no temperature data'}"
        if day.precipitation_sum is not None:
            entry += f", {_value(day.precipitation_sum, precip_unit)}"
        entry += f", {day.description}"
        lines.append(entry)

    return "\n".join(lines)


def format_locations(matches: List[LocationMatch]) -> str:
    if not matches:
        return NO_LOCATIONS_FOUND

    lines = ["🌍 Location Search Results:", ""]
    for i, match in enumerate(matches, start=1):
        place = match.name
        if match.admin1:
            place += f", {match.admin1}"
        place += f", {match.country or 'Unknown'}"
        if match.country_code:
            place += f" ({match.country_code})"

        lines.append(f"{i}. 📍 {place}")
        lines.append(f"📐 Coordinates: {match.coordinates.latitude:.4f}°, {match.coordinates.longitude:.4f}°")
        lines.append(f"🕐 Timezone: {match.timezone or 'Unknown'}")
        if match.elevation is not None:
            lines.append(f"⛰️ Elevation: {match.elevation:.0f}m")
        if match.population is not None:
            lines.append(f"👥 Population: {match.population}")
        lines.append("")

    return "\n".join(lines)
