"""Weather provider abstractions and implementations."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import date
from typing import List

import requests
from pydantic import BaseModel, ValidationError

from logic.errors import WeatherProviderError
from tools.observability import instrument_tool

LOGGER = logging.getLogger(__name__)

OPENWEATHER_FORECAST_URL = "https://api.openweathermap.org/data/2.5/forecast"


class _WeatherCondition(BaseModel):
    description: str = "unknown"


class _Wind(BaseModel):
    speed: float = 0.0


class _Main(BaseModel):
    temp_min: float
    temp_max: float


class _ForecastEntry(BaseModel):
    dt_txt: str
    main: _Main
    pop: float = 0.0
    wind: _Wind = _Wind()
    weather: List[_WeatherCondition] = []


class _City(BaseModel):
    name: str = ""


class _ForecastResponse(BaseModel):
    list: List[_ForecastEntry] = []
    city: _City = _City()


@dataclass
class WeatherProfile:
    """Forecast for one destination and day."""

    date: date
    temp_min: float
    temp_max: float
    precipitation_probability: float
    wind_speed: float
    weather_condition: str


class WeatherProvider(ABC):
    """Abstract weather provider interface."""

    @abstractmethod
    def get_forecast(self, location: str, date: date) -> WeatherProfile:
        """Return the forecast for ``location`` on ``date``.

        Raises:
            WeatherProviderError: when no forecast can be produced.
        """


# Ordered from most to least severe so a day's summary keeps the worst condition.
_CONDITION_SEVERITY = ("thunderstorm", "blizzard", "snow", "sleet", "heavy", "rain", "drizzle", "mist", "fog", "cloud", "clear")


def _severity(condition: str) -> int:
    lowered = condition.lower()
    for rank, keyword in enumerate(_CONDITION_SEVERITY):
        if keyword in lowered:
            return rank
    return len(_CONDITION_SEVERITY)


class OpenWeatherProvider(WeatherProvider):
    """OpenWeather 5 day / 3 hour forecast with schema validation."""

    def __init__(self, api_key: str | None = None, timeout_seconds: float = 5.0, units: str = "metric") -> None:
        self.api_key = api_key
        self.timeout_seconds = timeout_seconds
        self.units = units

    def _entries_for_day(self, entries: List[_ForecastEntry], target_date: date) -> List[_ForecastEntry]:
        target_day = target_date.isoformat()
        matching = [entry for entry in entries if entry.dt_txt.startswith(target_day)]
        if matching:
            return matching
        if not entries:
            return []
        # Outside the forecast window: summarise the first forecast day instead.
        first_day = entries[0].dt_txt[:10]
        LOGGER.info("Target date outside forecast window", extra={"date": target_day, "fallback_day": first_day})
        return [entry for entry in entries if entry.dt_txt.startswith(first_day)]

    def _summarise(self, entries: List[_ForecastEntry], target_date: date) -> WeatherProfile:
        conditions = [condition.description for entry in entries for condition in entry.weather] or ["unknown"]
        return WeatherProfile(
            date=target_date,
            temp_min=min(entry.main.temp_min for entry in entries),
            temp_max=max(entry.main.temp_max for entry in entries),
            precipitation_probability=max(entry.pop for entry in entries),
            wind_speed=max(entry.wind.speed for entry in entries),
            weather_condition=min(conditions, key=_severity),
        )

    @instrument_tool("get_weather_forecast")
    def get_forecast(self, location: str, date: date) -> WeatherProfile:
        if not location:
            raise WeatherProviderError("location is required for weather lookups")
        if not self.api_key:
            raise WeatherProviderError("OpenWeather API key is not configured")

        params = {"q": location, "appid": self.api_key, "units": self.units}
        try:
            response = requests.get(OPENWEATHER_FORECAST_URL, params=params, timeout=self.timeout_seconds)
            if response.status_code == 404:
                raise WeatherProviderError(f"Unknown destination: {location}")
            response.raise_for_status()
            parsed = _ForecastResponse.model_validate(response.json())
        except requests.RequestException as exc:
            LOGGER.error("Weather API unreachable", exc_info=exc)
            raise WeatherProviderError(f"Weather API unreachable: {exc}") from exc
        except ValidationError as exc:
            LOGGER.error("Weather payload schema validation failed", exc_info=exc)
            raise WeatherProviderError("Weather payload failed schema validation") from exc

        entries = self._entries_for_day(parsed.list, date)
        if not entries:
            raise WeatherProviderError(f"No forecast entries for {location}")
        return self._summarise(entries, date)


class MockWeatherProvider(WeatherProvider):
    """Offline deterministic weather provider for tests and local runs."""

    def __init__(self, profile: WeatherProfile | None = None) -> None:
        self.profile = profile
        self.calls: List[tuple[str, date]] = []

    def get_forecast(self, location: str, date: date) -> WeatherProfile:
        LOGGER.info("Returning mock forecast", extra={"date": str(date)})
        self.calls.append((location, date))
        if self.profile is not None:
            return self.profile
        return WeatherProfile(
            date=date,
            temp_min=12.0,
            temp_max=18.0,
            precipitation_probability=0.1,
            wind_speed=5.0,
            weather_condition="clear sky",
        )


__all__ = ["WeatherProfile", "WeatherProvider", "OpenWeatherProvider", "MockWeatherProvider"]
