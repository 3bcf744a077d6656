"""HTTP surface exercised through FastAPI's TestClient."""

import random
from datetime import date

import pytest
from fastapi.testclient import TestClient

from agents.intent_agent import KeywordIntentExtractor
from memory.preference_store import InMemoryPreferenceStore
from server import api as api_module
from server.api import create_app, get_app
from stylist_app.app import TravelStylistApp
from stylist_app.config import StylistConfig
from tools.image_search import SearchResult, StaticImageSearchProvider

CATALOG = [
    SearchResult(
        title="Tailored Blazer - Nordstrom",
        link="https://n.nordstromimage.com/blazer.jpg",
        image="https://n.nordstromimage.com/blazer.jpg",
        display_link="www.nordstrom.com",
        context_link="https://www.nordstrom.com/s/tailored-blazer/123",
    )
]


@pytest.fixture
def stylist() -> TravelStylistApp:
    return TravelStylistApp(
        StylistConfig(environment="test"),
        intent_extractor=KeywordIntentExtractor(today=lambda: date(2025, 1, 6)),
        search_provider=StaticImageSearchProvider(default=CATALOG),
        preference_store=InMemoryPreferenceStore(),
        rng=random.Random(5),
    )


@pytest.fixture
def client(stylist: TravelStylistApp) -> TestClient:
    return TestClient(create_app(stylist))


def test_healthcheck(client: TestClient) -> None:
    response = client.get("/healthz")
    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "ok"
    assert body["environment"] == "test"
    assert body["llm_enabled"] is False


def test_preferences_round_trip(client: TestClient) -> None:
    initial = client.get("/preferences/ana").json()
    assert initial == {"user_id": "ana", "gender": "any", "needs_preference": True}

    updated = client.put("/preferences/ana", json={"gender": "female"})
    assert updated.status_code == 200
    assert updated.json()["gender"] == "female"
    assert client.get("/preferences/ana").json()["needs_preference"] is False


def test_invalid_preference_is_rejected(client: TestClient) -> None:
    response = client.put("/preferences/ana", json={"gender": "robot"})
    assert response.status_code == 422


def test_event_plan_and_latest_plan(client: TestClient) -> None:
    assert client.get("/plans/ana").status_code == 404
    client.put("/preferences/ana", json={"gender": "male"})

    response = client.post("/plans", json={"user_id": "ana", "message": "Job interview Tuesday"})

    assert response.status_code == 200
    plan = response.json()
    assert plan["type"] == "event"
    assert plan["status"] == "success"
    assert plan["event"] == "Job interview"
    first_outfit = plan["outfits"][0]
    assert first_outfit["products"][0]["store"] == "Nordstrom"
    assert first_outfit["products"][0]["link"] == "https://www.nordstrom.com/s/tailored-blazer/123"
    assert client.get("/plans/ana").json()["id"] == plan["id"]


def test_travel_plan_payload(client: TestClient) -> None:
    plan = client.post("/plans", json={"user_id": "ben", "message": "Trip to Rome next week"}).json()
    assert plan["type"] == "travel"
    assert plan["destination"] == "Rome"
    assert plan["date"] == "2025-01-13"
    assert plan["weather"]["temperature_range"] == "12-18°C"


def test_error_plan_is_returned_as_payload(client: TestClient) -> None:
    plan = client.post("/plans", json={"user_id": "ben", "message": "  "}).json()
    assert plan["type"] == "error"
    assert plan["status"] == "error"
    assert plan["error"]


def test_superseded_submission_returns_conflict(stylist: TravelStylistApp, client: TestClient, monkeypatch) -> None:
    async def superseded(user_id, message):
        return None

    monkeypatch.setattr(stylist, "submit", superseded)
    response = client.post("/plans", json={"user_id": "ana", "message": "Job interview Tuesday"})
    assert response.status_code == 409


def test_default_app_is_built_on_first_use(monkeypatch) -> None:
    for key in ("APP_ENV", "APP_CONFIG_PATH", "GOOGLE_API_KEY", "PREFERENCE_STORE_PATH"):
        monkeypatch.delenv(key, raising=False)
    monkeypatch.setattr(api_module, "_app", None)

    assert api_module._app is None
    built = get_app()

    assert api_module.app is built
    assert get_app() is built
    assert TestClient(built).get("/healthz").json()["llm_enabled"] is False
