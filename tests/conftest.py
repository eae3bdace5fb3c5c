"""Shared fixtures: canned Open-Meteo payloads and a recording fake API."""

from typing import Any, Callable, List, Optional

import httpx
import pytest

from openmeteo_weather_mcp.client import OpenMeteoClient


class FakeOpenMeteo:
    """httpx.MockTransport handler that answers every request the same way"""

    def __init__(
        self,
        payload: Any = None,
        status_code: int = 200,
        text: Optional[str] = None,
        error: Optional[Callable[[httpx.Request], Exception]] = None,
    ):
        self.payload = payload
        self.status_code = status_code
        self.text = text
        self.error = error
        self.requests: List[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.error is not None:
            raise self.error(request)
        if self.text is not None:
            return httpx.Response(self.status_code, text=self.text)
        return httpx.Response(self.status_code, json=self.payload)

    def client(self) -> OpenMeteoClient:
        return OpenMeteoClient(http_client=httpx.AsyncClient(transport=httpx.MockTransport(self)))


@pytest.fixture
def fake_api():
    def factory(payload: Any = None, **kwargs: Any) -> FakeOpenMeteo:
        return FakeOpenMeteo(payload, **kwargs)

    return factory


@pytest.fixture
def current_payload():
    return {
        "latitude": 48.86,
        "longitude": 2.34,
        "current_units": {
            "time": "iso8601",
            "temperature_2m": "°C",
            "relative_humidity_2m": "%",
            "apparent_temperature": "°C",
            "precipitation": "mm",
            "snowfall": "cm",
            "cloud_cover": "%",
            "pressure_msl": "hPa",
            "wind_speed_10m": "km/h",
            "wind_direction_10m": "°",
            "wind_gusts_10m": "km/h",
        },
        "current": {
            "time": "2024-06-01T12:00",
            "temperature_2m": 21.5,
            "relative_humidity_2m": 55,
            "apparent_temperature": 20.9,
            "is_day": 1,
            "precipitation": 0.0,
            "rain": 0.0,
            "showers": 0.0,
            "snowfall": 0.0,
            "weather_code": 0,
            "cloud_cover": 10,
            "pressure_msl": 1016.2,
            "surface_pressure": 1006.1,
            "wind_speed_10m": 10.0,
            "wind_direction_10m": 240,
            "wind_gusts_10m": 22.3,
        },
    }


@pytest.fixture
def forecast_payload():
    return {
        "daily_units": {
            "temperature_2m_max": "°C",
            "precipitation_sum": "mm",
            "wind_speed_10m_max": "km/h",
            "precipitation_probability_max": "%",
        },
        "daily": {
            "time": ["2024-06-01", "2024-06-02", "2024-06-03"],
            "weather_code": [0, 61, 95],
            "temperature_2m_max": [24.1, 19.8, 22.0],
            "temperature_2m_min": [13.2, 12.5, 14.9],
            "sunrise": ["2024-06-01T05:49", "2024-06-02T05:48", "2024-06-03T05:48"],
            "sunset": ["2024-06-01T21:47", "2024-06-02T21:48", "2024-06-03T21:49"],
            "daylight_duration": [57480.0, 57600.0, 57660.0],
            "uv_index_max": [6.3, 3.1, 5.0],
            "precipitation_sum": [0.0, 7.4, 3.2],
            "precipitation_probability_max": [5, 90, 60],
            "wind_speed_10m_max": [14.2, 25.6, 18.0],
            "wind_gusts_10m_max": [30.2, 48.9, 41.0],
        },
    }


@pytest.fixture
def historical_payload():
    highs = [10.0, 12.5, 9.0, 15.5, 11.0, 13.0, 30.5, 8.0, 14.0, 12.0]
    return {
        "daily_units": {"temperature_2m_max": "°C", "precipitation_sum": "mm"},
        "daily": {
            "time": [f"2024-01-{day:02d}" for day in range(1, 11)],
            "weather_code": [3] * 10,
            "temperature_2m_max": highs,
            "temperature_2m_min": [high - 8 for high in highs],
            "temperature_2m_mean": [high - 4 for high in highs],
            "precipitation_sum": [1.0] * 10,
        },
    }


@pytest.fixture
def geocoding_payload():
    return {
        "results": [
            {
                "id": 2988507,
                "name": "Paris",
                "latitude": 48.85341,
                "longitude": 2.3488,
                "elevation": 42.0,
                "country_code": "FR",
                "timezone": "Europe/Paris",
                "population": 2138551,
                "country": "France",
                "admin1": "Île-de-France",
            },
            {
                "id": 4717560,
                "name": "Paris",
                "latitude": 33.66094,
                "longitude": -95.55551,
                "elevation": 183.0,
                "country_code": "US",
                "timezone": "America/Chicago",
                "population": 24782,
                "country": "United States",
                "admin1": "Texas",
            },
            {
                "id": 2988506,
                "name": "Paris",
                "latitude": 48.8667,
                "longitude": 2.3333,
                "country_code": "FR",
                "timezone": "Europe/Paris",
                "country": "France",
            },
        ]
    }
