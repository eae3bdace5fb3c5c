import re
from datetime import date

import pytest

from openmeteo_weather_mcp.formatting import (
    HISTORICAL_SAMPLE_DAYS,
    NO_LOCATIONS_FOUND,
    UNKNOWN_CONDITIONS,
    WEATHER_CODES,
    describe_weather_code,
    format_current_weather,
    format_historical_weather,
    format_locations,
    format_weather_forecast,
)
from openmeteo_weather_mcp.models import (
    Coordinates,
    ForecastDay,
    ForecastRequest,
    HistoricalDay,
    HistoricalSummary,
    LocationMatch,
    WeatherSnapshot,
)

PARIS = Coordinates(latitude=48.8534, longitude=2.3488)


def test_known_weather_codes():
    assert describe_weather_code(0) == "clear sky"
    assert describe_weather_code(3) == "overcast"
    assert describe_weather_code(95) == "thunderstorm"


def test_unknown_weather_code_falls_back():
    for code in (4, 42, 100, -1, None):
        assert describe_weather_code(code) == UNKNOWN_CONDITIONS
    assert UNKNOWN_CONDITIONS


def test_weather_code_table_is_read_only():
    with pytest.raises(TypeError):
        WEATHER_CODES[0] = "sunny"  # type: ignore[index]
    assert WEATHER_CODES[0] == "clear sky"


def test_current_weather_report():
    snapshot = WeatherSnapshot(
        time="2024-06-01T12:00",
        temperature=21.5,
        apparent_temperature=20.94,
        humidity=55,
        wind_speed=10,
        wind_direction=240,
        pressure=1016.24,
        weather_code=0,
        description="clear sky",
        is_day=True,
    )
    text = format_current_weather(snapshot, PARIS)

    assert "21.5°C" in text
    assert "clear sky" in text
    assert "10.0km/h" in text
    assert "Feels like: 20.9°C" in text
    assert "Pressure: 1016.2hPa" in text
    assert "Location: 48.85°, 2.35°" in text
    assert "Daytime" in text
    assert format_current_weather(snapshot, PARIS) == text


def test_current_weather_night_and_missing_fields():
    snapshot = WeatherSnapshot(temperature=4.0, description="overcast", is_day=False)
    text = format_current_weather(snapshot, PARIS)

    assert "Nighttime" in text
    assert "Humidity" not in text
    assert "Wind" not in text
    assert "Pressure" not in text
    assert "Time: Unknown" in text


def test_current_weather_uses_provider_units():
    snapshot = WeatherSnapshot(
        temperature=70.7, wind_speed=6.2, description="clear sky", units={"temperature": "°F", "wind_speed": "mp/h"}
    )
    text = format_current_weather(snapshot, PARIS)
    assert "70.7°F" in text
    assert "6.2mp/h" in text


def test_forecast_report():
    days = [
        ForecastDay(
            date=f"2024-06-0{i}",
            temperature_max=20.0 + i,
            temperature_min=10.0 + i,
            description="slight rain",
            precipitation_sum=1.25,
            precipitation_probability=80,
            wind_speed_max=12.0,
            sunrise="05:49",
            sunset="21:47",
            uv_index_max=5.0,
            daylight_duration=57480.0,
        )
        for i in range(1, 5)
    ]
    request = ForecastRequest(coordinates=PARIS, days=3)
    text = format_weather_forecast(days, request)

    assert text.startswith("🌍 3-Day Weather Forecast")
    assert text.count("📅") == 3
    assert "2024-06-04" not in text
    assert "21.0°C / 11.0°C" in text
    assert "(80% chance)" in text
    assert "Daylight: 15h 58m" in text
    assert "UV index: 5.0" in text


def _summary(n_days: int) -> HistoricalSummary:
    days = [
        HistoricalDay(
            date=f"2024-01-{i:02d}",
            temperature_max=float(i),
            temperature_min=float(-i),
            precipitation_sum=0.5,
            description="overcast",
        )
        for i in range(1, n_days + 1)
    ]
    return HistoricalSummary(
        coordinates=PARIS,
        start_date=date(2024, 1, 1),
        end_date=date(2024, 1, n_days),
        days=days,
        day_count=n_days,
        highest_max=float(n_days),
        highest_max_date=f"2024-01-{n_days:02d}",
        lowest_min=float(-n_days),
        lowest_min_date=f"2024-01-{n_days:02d}",
        total_precipitation=0.5 * n_days,
    )


def _listed_days(text: str) -> list:
    return re.findall(r"^\d{4}-\d{2}-\d{2}:", text, flags=re.MULTILINE)


def test_historical_report_lists_first_five_days_only():
    text = format_historical_weather(_summary(10))

    assert len(_listed_days(text)) == HISTORICAL_SAMPLE_DAYS == 5
    assert "2024-01-05:" in text
    assert "2024-01-06:" not in text
    assert "Summary Statistics (10 days)" in text
    assert "Highest: 10.0°C on 2024-01-10" in text
    assert "Total Precipitation: 5.0mm" in text
    assert "Period: 2024-01-01 to 2024-01-10" in text


def test_historical_report_short_series():
    text = format_historical_weather(_summary(3))
    assert len(_listed_days(text)) == 3


def test_historical_report_without_data():
    summary = HistoricalSummary(coordinates=PARIS, start_date=date(2024, 1, 1), end_date=date(2024, 1, 2), days=[])
    text = format_historical_weather(summary)
    assert "No daily data available" in text
    assert _listed_days(text) == []


def test_locations_report():
    matches = [
        LocationMatch(
            name="Paris",
            country="France",
            admin1="Île-de-France",
            coordinates=PARIS,
            timezone="Europe/Paris",
            population=2138551,
        ),
        LocationMatch(name="Paris", country="France", coordinates=Coordinates(latitude=48.8667, longitude=2.3333)),
    ]
    text = format_locations(matches)

    assert "1. 📍 Paris, Île-de-France, France" in text
    assert "2. 📍 Paris, France" in text
    assert "Coordinates: 48.8534°, 2.3488°" in text
    assert text.count("Population") == 1
    assert "Timezone: Unknown" in text


def test_no_locations():
    assert format_locations([]) == NO_LOCATIONS_FOUND


def test_current_weather_precipitation_types_and_surface_pressure():
    snapshot = WeatherSnapshot(
        precipitation=1.4,
        rain=0.6,
        showers=0.0,
        snowfall=0.56,
        pressure=1016.2,
        surface_pressure=1006.1,
        description="slight snow fall",
        units={"precipitation": "mm"},
    )
    text = format_current_weather(snapshot, PARIS)

    assert "Precipitation by type: rain 0.6mm, showers 0.0mm, snowfall 0.6cm" in text
    assert "Pressure: 1016.2hPa (surface 1006.1hPa)" in text


def test_current_weather_surface_pressure_only():
    snapshot = WeatherSnapshot(surface_pressure=1006.1, description="overcast")
    text = format_current_weather(snapshot, PARIS)

    assert "Surface pressure: 1006.1hPa" in text
    assert "by type" not in text


def test_forecast_day_details():
    day = ForecastDay(
        date="2024-06-01",
        temperature_max=24.1,
        temperature_min=13.2,
        apparent_temperature_max=25.0,
        apparent_temperature_min=12.1,
        description="clear sky",
        wind_speed_max=14.2,
        wind_gusts_max=30.2,
        wind_direction_dominant=225,
        sunshine_duration=43200.0,
    )
    text = format_weather_forecast([day], ForecastRequest(coordinates=PARIS, days=1))

    assert "Feels like 25.0°C / 12.1°C" in text
    assert "14.2km/h from 225°, gusts 30.2km/h" in text
    assert "Sunshine: 12h 00m" in text


def test_locations_report_country_code():
    match = LocationMatch(name="Paris", country="United States", country_code="US", admin1="Texas", coordinates=PARIS)
    text = format_locations([match])

    assert "1. 📍 Paris, Texas, United States (US)" in text
