from datetime import date
from typing import Dict, List, Optional

from pydantic import BaseModel, Field


class Coordinates(BaseModel):
    """Geographic coordinates"""
    latitude: float = Field(..., ge=-90, le=90)
    longitude: float = Field(..., ge=-180, le=180)


class ForecastRequest(BaseModel):
    """Validated get_weather_forecast parameters"""
    coordinates: Coordinates
    days: int = Field(7, ge=1, le=16)


class HistoricalRequest(BaseModel):
    """Validated get_historical_weather parameters"""
    coordinates: Coordinates
    start_date: date
    end_date: date


class LocationQuery(BaseModel):
    """Validated search_locations parameters"""
    query: str
    city: str = Field(..., min_length=1)
    country: Optional[str] = None
    limit: int = Field(10, ge=1, le=100)


class WeatherSnapshot(BaseModel):
    """Current conditions at one location"""
    time: Optional[str] = None
    temperature: Optional[float] = None
    apparent_temperature: Optional[float] = None
    humidity: Optional[float] = None
    precipitation: Optional[float] = None
    rain: Optional[float] = None
    showers: Optional[float] = None
    snowfall: Optional[float] = None
    wind_speed: Optional[float] = None
    wind_direction: Optional[float] = None
    wind_gusts: Optional[float] = None
    pressure: Optional[float] = None
    surface_pressure: Optional[float] = None
    cloud_cover: Optional[float] = None
    weather_code: Optional[int] = None
    description: str
    is_day: Optional[bool] = None
    units: Dict[str, str] = Field(default_factory=dict)


class ForecastDay(BaseModel):
    """One day of a multi-day forecast"""
    date: str
    temperature_max: Optional[float] = None
    temperature_min: Optional[float] = None
    apparent_temperature_max: Optional[float] = None
    apparent_temperature_min: Optional[float] = None
    weather_code: Optional[int] = None
    description: str
    precipitation_sum: Optional[float] = None
    precipitation_probability: Optional[float] = None
    wind_speed_max: Optional[float] = None
    wind_gusts_max: Optional[float] = None
    wind_direction_dominant: Optional[float] = None
    sunrise: Optional[str] = None
    sunset: Optional[str] = None
    uv_index_max: Optional[float] = None
    daylight_duration: Optional[float] = None
    sunshine_duration: Optional[float] = None
    units: Dict[str, str] = Field(default_factory=dict)


class HistoricalDay(BaseModel):
    """Daily aggregates for one archived day"""
    date: str
    temperature_max: Optional[float] = None
    temperature_min: Optional[float] = None
    temperature_mean: Optional[float] = None
    precipitation_sum: Optional[float] = None
    weather_code: Optional[int] = None
    description: str


class HistoricalSummary(BaseModel):
    """Archived daily series plus aggregates over the whole range"""
    coordinates: Coordinates
    start_date: date
    end_date: date
    days: List[HistoricalDay]
    units: Dict[str, str] = Field(default_factory=dict)
    day_count: int = 0
    highest_max: Optional[float] = None
    highest_max_date: Optional[str] = None
    lowest_min: Optional[float] = None
    lowest_min_date: Optional[str] = None
    mean_max: Optional[float] = None
    mean_min: Optional[float] = None
    mean_temperature: Optional[float] = None
    total_precipitation: Optional[float] = None
    mean_precipitation: Optional[float] = None


class LocationMatch(BaseModel):
    """Geocoding search result"""
    name: str
    country: Optional[str] = None
    country_code: Optional[str] = None
    admin1: Optional[str] = None
    coordinates: Coordinates
    elevation: Optional[float] = None
    timezone: Optional[str] = None
    population: Optional[int] = None
