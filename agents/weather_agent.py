"""Weather agent that turns a forecast into trip context and advisories."""

from __future__ import annotations

import asyncio
import logging
from datetime import date, datetime
from typing import Optional, Tuple

from logic.errors import WeatherError, WeatherProviderError
from models.plan import WeatherContext
from stylist_app.logging_config import get_logger, log_event, operation_context
from tools.weather_provider import WeatherProfile, WeatherProvider

LOGGER = get_logger(__name__)

HEAVY_RAIN_PROBABILITY = 0.8
EXTREME_HEAT_C = 35.0
EXTREME_COLD_C = -10.0
STRONG_WIND_MS = 17.0

# First matching keyword wins.
CONDITION_ADVISORIES: Tuple[Tuple[str, str], ...] = (
    ("thunderstorm", "Thunderstorms expected"),
    ("blizzard", "Heavy snow expected"),
    ("heavy snow", "Heavy snow expected"),
    ("snow", "Snow expected"),
    ("sleet", "Freezing rain expected"),
    ("heavy rain", "Heavy rain expected"),
    ("heavy intensity rain", "Heavy rain expected"),
)


def temperature_band(temp_min: float, temp_max: float) -> str:
    avg_temp = (temp_min + temp_max) / 2
    if avg_temp < 5:
        return "cold"
    if avg_temp < 12:
        return "cool"
    if avg_temp < 18:
        return "mild"
    if avg_temp < 24:
        return "warm"
    return "hot"


def advisory_for(profile: WeatherProfile) -> Optional[str]:
    """Return a warning when the forecast crosses an advisory threshold."""

    condition = profile.weather_condition.lower()
    for keyword, warning in CONDITION_ADVISORIES:
        if keyword in condition:
            return warning
    if profile.precipitation_probability > HEAVY_RAIN_PROBABILITY:
        return "Heavy rain expected"
    if profile.temp_max >= EXTREME_HEAT_C:
        return "Extreme heat expected"
    if profile.temp_min <= EXTREME_COLD_C:
        return "Extreme cold expected"
    if profile.wind_speed >= STRONG_WIND_MS:
        return "Strong winds expected"
    return None


def parse_travel_date(raw_date: str) -> date:
    """Parse ISO-like dates such as ``2025-12-06`` or ``2025/12/06``."""

    cleaned = raw_date.strip().replace("/", "-").replace(" ", "-")
    return datetime.fromisoformat(cleaned).date()


class WeatherAgent:
    """Fetches a forecast and classifies it into a :class:`WeatherContext`."""

    def __init__(self, provider: WeatherProvider) -> None:
        self.provider = provider

    async def forecast(self, destination: str, travel_date: str) -> WeatherContext:
        with operation_context("agent:weather.forecast") as correlation_id:
            if not destination or not destination.strip():
                raise WeatherError("destination missing", "I need a destination to check the weather.")
            try:
                target = parse_travel_date(travel_date)
            except (TypeError, ValueError) as exc:
                raise WeatherError(
                    f"unparseable date {travel_date!r}",
                    "I couldn't understand the travel date. Try something like 'next Friday' or '2025-12-06'.",
                ) from exc

            try:
                profile = await asyncio.to_thread(self.provider.get_forecast, destination, target)
            except WeatherProviderError as exc:
                raise WeatherError(str(exc)) from exc

            warning = advisory_for(profile)
            context = WeatherContext(
                destination=destination,
                date=profile.date.isoformat(),
                conditions=profile.weather_condition,
                temperature_range=f"{profile.temp_min:.0f}-{profile.temp_max:.0f}°C",
                warning=warning,
                temp_min=profile.temp_min,
                temp_max=profile.temp_max,
            )
            log_event(
                LOGGER,
                level=logging.INFO,
                event="agent_call_completed",
                agent="weather",
                method="forecast",
                correlation_id=correlation_id,
                date=context.date,
                conditions=context.conditions,
                band=temperature_band(profile.temp_min, profile.temp_max),
                advisory=bool(warning),
            )
            return context


__all__ = ["WeatherAgent", "advisory_for", "parse_travel_date", "temperature_band"]
