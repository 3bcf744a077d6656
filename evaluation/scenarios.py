"""Evaluation scenarios covering travel advisories, events and failing categories."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Dict, List, Tuple

from models.garments import GarmentSlot, GenderPreference
from tools.image_search import SearchResult
from tools.weather_provider import WeatherProfile


@dataclass
class EvaluationScenario:
    name: str
    description: str
    message: str
    gender: GenderPreference
    today: date
    weather_profile: WeatherProfile | None
    catalog: List[SearchResult]
    failing_slots: Tuple[GarmentSlot, ...] = ()
    expectations: Dict[str, object] = field(default_factory=dict)


def _catalog() -> List[SearchResult]:
    return [
        SearchResult(
            title="Wool Blend Overshirt | ZARA United States",
            link="https://www.zara.com/us/en/wool-overshirt-p1.html",
            image="https://static.zara.net/photos/wool-overshirt.jpg",
            display_link="www.zara.com",
            snippet="Relaxed fit overshirt in a wool blend.",
        ),
        SearchResult(
            title="Image without a product page",
            link="",
            image="https://images.example.com/orphan.jpg",
            display_link="www.asos.com",
        ),
        SearchResult(
            title="Heattech Crew Neck - UNIQLO US",
            link="https://www.uniqlo.com/us/en/products/E450",
            image="https://image.uniqlo.com/UQ/E450.jpg",
            display_link="www.uniqlo.com",
            context_link="https://www.uniqlo.com/us/en/products/E450?colorDisplayCode=09",
        ),
    ]


SCENARIOS = [
    EvaluationScenario(
        name="snowy_trip_advisory",
        description="Winter trip where heavy snow should raise an advisory and drive warm outfits.",
        message="Ski trip to Chamonix on 2025-01-15",
        gender=GenderPreference.MALE,
        today=date(2025, 1, 6),
        weather_profile=WeatherProfile(
            date=date(2025, 1, 15),
            temp_min=-8.0,
            temp_max=-2.0,
            precipitation_probability=0.9,
            wind_speed=6.0,
            weather_condition="heavy snow",
        ),
        catalog=_catalog(),
        expectations={
            "plan_type": "travel",
            "status": "warning",
            "min_outfits": 1,
            "requires_products": True,
            "requires_outer": True,
        },
    ),
    EvaluationScenario(
        name="job_interview",
        description="Event request classified as business dress for a female preference.",
        message="Job interview Tuesday",
        gender=GenderPreference.FEMALE,
        today=date(2025, 1, 6),
        weather_profile=None,
        catalog=_catalog(),
        expectations={"plan_type": "event", "status": "success", "min_outfits": 1, "requires_products": True},
    ),
    EvaluationScenario(
        name="failing_shoe_search",
        description="Mild city break where every shoe search fails but the plan still succeeds.",
        message="Weekend trip to Lisbon on 2025-05-10",
        gender=GenderPreference.ANY,
        today=date(2025, 5, 5),
        weather_profile=WeatherProfile(
            date=date(2025, 5, 10),
            temp_min=14.0,
            temp_max=21.0,
            precipitation_probability=0.1,
            wind_speed=4.0,
            weather_condition="clear sky",
        ),
        catalog=_catalog(),
        failing_slots=(GarmentSlot.SHOES,),
        expectations={
            "plan_type": "travel",
            "status": "success",
            "min_outfits": 1,
            "requires_products": True,
            "missing_category": "shoes",
        },
    ),
]


__all__ = ["EvaluationScenario", "SCENARIOS"]
