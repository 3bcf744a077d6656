"""Weather resolution, advisories and the OpenWeather provider."""

import asyncio
from datetime import date

import pytest
import requests

from agents.weather_agent import WeatherAgent, advisory_for, temperature_band
from logic.errors import WeatherError, WeatherProviderError
from tools.weather_provider import MockWeatherProvider, OpenWeatherProvider, WeatherProfile


def _profile(**overrides) -> WeatherProfile:
    fields = {
        "date": date(2025, 3, 14),
        "temp_min": 12.0,
        "temp_max": 18.0,
        "precipitation_probability": 0.1,
        "wind_speed": 4.0,
        "weather_condition": "few clouds",
    }
    fields.update(overrides)
    return WeatherProfile(**fields)


class _FakeResponse:
    def __init__(self, payload, status_code: int = 200) -> None:
        self.payload = payload
        self.status_code = status_code

    def json(self):
        return self.payload

    def raise_for_status(self) -> None:
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} error")


def _entry(dt_txt: str, temp_min: float, temp_max: float, description: str, pop: float = 0.0, wind: float = 3.0):
    return {
        "dt_txt": dt_txt,
        "main": {"temp_min": temp_min, "temp_max": temp_max},
        "pop": pop,
        "wind": {"speed": wind},
        "weather": [{"description": description}],
    }


class _FailingProvider(MockWeatherProvider):
    def get_forecast(self, location, date):
        raise WeatherProviderError(f"Unknown destination: {location}")


@pytest.mark.parametrize(
    "overrides, expected",
    [
        ({}, None),
        ({"weather_condition": "heavy snow"}, "Heavy snow expected"),
        ({"weather_condition": "light snow"}, "Snow expected"),
        ({"weather_condition": "thunderstorm with rain"}, "Thunderstorms expected"),
        ({"weather_condition": "heavy intensity rain"}, "Heavy rain expected"),
        ({"weather_condition": "light rain", "precipitation_probability": 0.85}, "Heavy rain expected"),
        ({"temp_min": 28.0, "temp_max": 36.0}, "Extreme heat expected"),
        ({"temp_min": -12.0, "temp_max": -4.0}, "Extreme cold expected"),
        ({"wind_speed": 18.0}, "Strong winds expected"),
        ({"precipitation_probability": 0.8}, None),
    ],
)
def test_advisory_thresholds(overrides, expected) -> None:
    assert advisory_for(_profile(**overrides)) == expected


def test_temperature_bands() -> None:
    assert temperature_band(-8, -2) == "cold"
    assert temperature_band(6, 12) == "cool"
    assert temperature_band(12, 18) == "mild"
    assert temperature_band(18, 26) == "warm"
    assert temperature_band(26, 34) == "hot"


def test_weather_agent_builds_context_from_forecast() -> None:
    provider = MockWeatherProvider(_profile())
    agent = WeatherAgent(provider)

    context = asyncio.run(agent.forecast("Lisbon", "2025-03-14"))

    assert context.destination == "Lisbon"
    assert context.date == "2025-03-14"
    assert context.conditions == "few clouds"
    assert context.temperature_range == "12-18°C"
    assert context.warning is None
    assert provider.calls == [("Lisbon", date(2025, 3, 14))]


def test_weather_agent_carries_advisory() -> None:
    agent = WeatherAgent(MockWeatherProvider(_profile(weather_condition="blizzard", temp_min=-9, temp_max=-3)))
    context = asyncio.run(agent.forecast("Chamonix", "2025/01/15"))
    assert context.warning == "Heavy snow expected"
    assert context.to_dict()["warning"] == "Heavy snow expected"


@pytest.mark.parametrize("destination, travel_date", [("", "2025-03-14"), ("Lisbon", "next Friday"), ("Lisbon", "")])
def test_weather_agent_rejects_bad_input(destination: str, travel_date: str) -> None:
    with pytest.raises(WeatherError):
        asyncio.run(WeatherAgent(MockWeatherProvider()).forecast(destination, travel_date))


def test_weather_agent_translates_provider_errors() -> None:
    with pytest.raises(WeatherError) as excinfo:
        asyncio.run(WeatherAgent(_FailingProvider()).forecast("Atlantis", "2025-03-14"))
    assert excinfo.value.user_message == WeatherError.default_user_message


def test_openweather_requires_api_key() -> None:
    with pytest.raises(WeatherProviderError):
        OpenWeatherProvider(api_key=None).get_forecast("Lisbon", date(2025, 3, 14))


def test_openweather_summarises_the_target_day(monkeypatch) -> None:
    payload = {
        "city": {"name": "Oslo"},
        "list": [
            _entry("2025-03-13 21:00:00", 1.0, 3.0, "clear sky"),
            _entry("2025-03-14 06:00:00", -2.0, 1.0, "light snow", pop=0.4, wind=6.0),
            _entry("2025-03-14 12:00:00", 2.0, 5.0, "overcast clouds", pop=0.2, wind=9.5),
            _entry("2025-03-15 12:00:00", 4.0, 8.0, "heavy intensity rain", pop=1.0),
        ],
    }
    captured = {}

    def fake_get(url, params=None, timeout=None):
        captured.update(params)
        return _FakeResponse(payload)

    monkeypatch.setattr("tools.weather_provider.requests.get", fake_get)

    profile = OpenWeatherProvider(api_key="test-key").get_forecast("Oslo", date(2025, 3, 14))

    assert captured["q"] == "Oslo"
    assert captured["units"] == "metric"
    assert profile.date == date(2025, 3, 14)
    assert profile.temp_min == -2.0
    assert profile.temp_max == 5.0
    assert profile.precipitation_probability == 0.4
    assert profile.wind_speed == 9.5
    assert profile.weather_condition == "light snow"


def test_openweather_falls_back_to_first_forecast_day(monkeypatch) -> None:
    payload = {"list": [_entry("2025-03-14 12:00:00", 10.0, 15.0, "clear sky")]}
    monkeypatch.setattr("tools.weather_provider.requests.get", lambda *a, **k: _FakeResponse(payload))

    profile = OpenWeatherProvider(api_key="test-key").get_forecast("Rome", date(2025, 4, 30))

    assert profile.temp_max == 15.0
    assert profile.weather_condition == "clear sky"


@pytest.mark.parametrize(
    "response",
    [
        _FakeResponse({"cod": "404"}, status_code=404),
        _FakeResponse({}, status_code=500),
        _FakeResponse({"list": [{"dt_txt": "2025-03-14 12:00:00"}]}),
        _FakeResponse({"list": []}),
    ],
)
def test_openweather_errors_raise_provider_error(monkeypatch, response) -> None:
    monkeypatch.setattr("tools.weather_provider.requests.get", lambda *a, **k: response)
    with pytest.raises(WeatherProviderError):
        OpenWeatherProvider(api_key="test-key").get_forecast("Nowhere", date(2025, 3, 14))
