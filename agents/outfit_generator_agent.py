"""Outfit generator agents producing abstract slot-by-slot outfit descriptions."""

from __future__ import annotations

import json
import logging
import re
from abc import ABC, abstractmethod
from dataclasses import replace
from typing import Dict, List, Optional, Tuple

from pydantic import ValidationError

from agents.weather_agent import temperature_band
from logic.errors import GenerationError
from logic.safety import system_instruction
from logic.validation import OutfitSuggestionsPayload
from models.garments import GenderPreference
from models.outfit import OutfitDescription
from models.plan import WeatherContext
from stylist_app.logging_config import get_logger, log_event, operation_context
from tools.gemini_client import GeminiJSONClient

LOGGER = get_logger(__name__)

DEFAULT_OUTFIT_COUNT = 3


class OutfitGenerator(ABC):
    """Abstract outfit generation interface."""

    @abstractmethod
    async def generate(
        self,
        gender: GenderPreference,
        weather: WeatherContext | None = None,
        event: str | None = None,
    ) -> List[OutfitDescription]:
        """Return outfits for the weather or event context.

        An empty list is a valid answer; failures raise :class:`GenerationError`.
        """


def _require_context(weather: WeatherContext | None, event: str | None) -> None:
    if (weather is None) == (event is None):
        raise GenerationError("exactly one of weather or event context is required")


class GeminiOutfitGenerator(OutfitGenerator):
    """LLM-backed generator validated against :class:`OutfitSuggestionsPayload`."""

    def __init__(self, client: GeminiJSONClient, outfit_count: int = DEFAULT_OUTFIT_COUNT) -> None:
        self.client = client
        self.outfit_count = outfit_count

    @classmethod
    def from_model(cls, model: str, api_key: str | None) -> "GeminiOutfitGenerator":
        instruction = system_instruction(
            "outfit generator. Suggest complete outfits that suit the weather or occasion and the style preference"
        )
        return cls(GeminiJSONClient(model=model, system_instruction=instruction, api_key=api_key, temperature=0.7))

    def _prompt(self, gender: GenderPreference, weather: WeatherContext | None, event: str | None) -> str:
        if weather is not None:
            context = "Weather: " + json.dumps(weather.to_dict())
        else:
            context = f"Event: {event}"
        style = "any style" if gender is GenderPreference.ANY else f"{gender.value} clothing"
        return (
            f"{context}\n"
            f"Style preference: {style}.\n"
            f"Suggest {self.outfit_count} outfits. Reply with "
            '{"outfits": [{"name": str, "description": {"top": str, "outer": str | null, '
            '"bottom": str | null, "shoes": str, "accessories": [str]}, "reasoning": str}]}. '
            "Each description is a short generic garment phrase such as 'navy wool peacoat'."
        )

    async def generate(
        self,
        gender: GenderPreference,
        weather: WeatherContext | None = None,
        event: str | None = None,
    ) -> List[OutfitDescription]:
        _require_context(weather, event)
        gender = GenderPreference.parse(gender)
        with operation_context("agent:outfit_generator.generate") as correlation_id:
            try:
                raw = await self.client.generate_json(self._prompt(gender, weather, event))
                payload = OutfitSuggestionsPayload.model_validate(raw)
            except ValidationError as exc:
                raise GenerationError(f"outfit payload failed validation: {exc.error_count()} errors") from exc
            except Exception as exc:
                raise GenerationError(f"outfit generation failed: {type(exc).__name__}") from exc

            outfits = [outfit.to_description() for outfit in payload.outfits]
            log_event(
                LOGGER,
                level=logging.INFO,
                event="agent_call_completed",
                agent="outfit_generator",
                method="generate",
                correlation_id=correlation_id,
                outfit_count=len(outfits),
            )
            return outfits


def _outfit(name: str, **slots: object) -> OutfitDescription:
    accessories = tuple(slots.pop("accessories", ()))  # type: ignore[arg-type]
    return OutfitDescription(name=name, accessories=accessories, **slots)  # type: ignore[arg-type]


Template = Tuple[OutfitDescription, Dict[str, object]]

WEATHER_TEMPLATES: Dict[str, List[Template]] = {
    "cold": [
        (
            _outfit(
                "Warm City Layers",
                top="chunky knit sweater",
                outer="wool overcoat",
                bottom="dark wool trousers",
                shoes="leather ankle boots",
                accessories=("cashmere scarf", "leather gloves"),
            ),
            {"bottom": "fleece-lined leggings", "shoes": "knee-high leather boots"},
        ),
        (
            _outfit(
                "Cozy Explorer",
                top="thermal turtleneck",
                outer="insulated puffer jacket",
                bottom="straight-leg jeans",
                shoes="waterproof winter boots",
                accessories=("knit beanie",),
            ),
            {"outer": "long quilted puffer coat"},
        ),
    ],
    "cool": [
        (
            _outfit(
                "Layered Casual",
                top="cotton oxford shirt",
                outer="quilted jacket",
                bottom="slim chinos",
                shoes="suede sneakers",
                accessories=("wool scarf",),
            ),
            {"top": "fine-knit sweater", "bottom": "wide-leg trousers"},
        ),
        (
            _outfit(
                "Smart Sightseeing",
                top="merino crew neck sweater",
                outer="trench coat",
                bottom="straight-leg jeans",
                shoes="leather loafers",
                accessories=("crossbody bag",),
            ),
            {},
        ),
    ],
    "mild": [
        (
            _outfit(
                "Easy Day Out",
                top="striped long-sleeve tee",
                outer="denim jacket",
                bottom="relaxed chinos",
                shoes="white sneakers",
                accessories=("canvas tote bag",),
            ),
            {"bottom": "midi skirt"},
        ),
        (
            _outfit(
                "Polished Casual",
                top="linen button-up shirt",
                outer="lightweight blazer",
                bottom="tailored trousers",
                shoes="loafers",
                accessories=("leather belt",),
            ),
            {"top": "silk blouse", "accessories": ("gold hoop earrings",)},
        ),
    ],
    "warm": [
        (
            _outfit(
                "Breezy Afternoon",
                top="linen shirt",
                bottom="cotton shorts",
                shoes="canvas sneakers",
                accessories=("sunglasses",),
            ),
            {"top": "linen sundress", "bottom": None, "shoes": "espadrille sandals"},
        ),
        (
            _outfit(
                "Evening Stroll",
                top="short-sleeve knit polo",
                bottom="lightweight chinos",
                shoes="leather sandals",
                accessories=("woven belt",),
            ),
            {"top": "silk camisole", "bottom": "flowy midi skirt"},
        ),
    ],
    "hot": [
        (
            _outfit(
                "Heatwave Ready",
                top="breathable linen tee",
                bottom="linen shorts",
                shoes="slide sandals",
                accessories=("sun hat", "sunglasses"),
            ),
            {"top": "cotton tank top"},
        ),
        (
            _outfit(
                "Beach to Dinner",
                top="camp collar shirt",
                bottom="drawstring linen trousers",
                shoes="leather espadrilles",
                accessories=("straw hat",),
            ),
            {"top": "floaty maxi dress", "bottom": None, "accessories": ("straw tote bag",)},
        ),
    ],
}

EVENT_TEMPLATES: Dict[str, List[Template]] = {
    "formal": [
        (
            _outfit(
                "Black Tie Classic",
                top="crisp white formal shirt",
                outer="tailored tuxedo jacket",
                bottom="tuxedo trousers",
                shoes="patent leather oxford shoes",
                accessories=("silk bow tie", "cufflinks"),
            ),
            {
                "top": "floor-length satin evening dress",
                "outer": None,
                "bottom": None,
                "shoes": "strappy heels",
                "accessories": ("statement earrings", "beaded clutch"),
            },
        ),
        (
            _outfit(
                "Modern Formal",
                top="fine cotton formal shirt",
                outer="midnight blue suit jacket",
                bottom="slim suit trousers",
                shoes="black leather loafers",
                accessories=("pocket square",),
            ),
            {
                "top": "wrap midi dress",
                "outer": "cropped tailored jacket",
                "bottom": None,
                "shoes": "block heel pumps",
                "accessories": ("pearl necklace",),
            },
        ),
    ],
    "business": [
        (
            _outfit(
                "Interview Ready",
                top="light blue oxford shirt",
                outer="navy wool suit jacket",
                bottom="navy suit trousers",
                shoes="brown leather oxford shoes",
                accessories=("silk tie", "leather strap watch"),
            ),
            {
                "top": "silk blouse",
                "outer": "tailored blazer",
                "bottom": "pencil skirt",
                "shoes": "pointed-toe pumps",
                "accessories": ("pearl stud earrings", "structured handbag"),
            },
        ),
        (
            _outfit(
                "Business Casual",
                top="knit polo shirt",
                outer="unstructured blazer",
                bottom="charcoal chinos",
                shoes="suede derby shoes",
                accessories=("leather belt",),
            ),
            {"top": "fine-knit shell top", "bottom": "wide-leg trousers", "shoes": "leather loafers"},
        ),
    ],
    "smart_casual": [
        (
            _outfit(
                "Night Out",
                top="black knit t-shirt",
                outer="suede bomber jacket",
                bottom="dark slim jeans",
                shoes="leather chelsea boots",
                accessories=("minimalist watch",),
            ),
            {"top": "satin slip dress", "bottom": None, "shoes": "ankle strap heels", "accessories": ("mini handbag",)},
        ),
        (
            _outfit(
                "Dinner Date",
                top="linen button-up shirt",
                bottom="tailored chinos",
                shoes="suede loafers",
                accessories=("leather bracelet",),
            ),
            {"top": "ruffled blouse", "bottom": "satin midi skirt", "shoes": "block heel sandals"},
        ),
    ],
    "active": [
        (
            _outfit(
                "Trail Ready",
                top="moisture-wicking t-shirt",
                outer="packable windbreaker",
                bottom="hiking pants",
                shoes="trail running shoes",
                accessories=("baseball cap",),
            ),
            {"bottom": "high-waisted leggings"},
        ),
        (
            _outfit(
                "Gym Session",
                top="performance tank top",
                bottom="training shorts",
                shoes="cross-training sneakers",
                accessories=("sports water bottle",),
            ),
            {"top": "sports bra and cropped tee", "bottom": "bike shorts"},
        ),
    ],
    "casual": [
        (
            _outfit(
                "Relaxed Weekend",
                top="crew neck sweatshirt",
                bottom="straight-leg jeans",
                shoes="white leather sneakers",
                accessories=("canvas backpack",),
            ),
            {"top": "oversized knit sweater"},
        ),
        (
            _outfit(
                "Easy Brunch",
                top="oxford shirt",
                outer="denim jacket",
                bottom="chino shorts",
                shoes="canvas slip-on sneakers",
                accessories=("sunglasses",),
            ),
            {"top": "striped shirt dress", "bottom": None},
        ),
    ],
}

EVENT_FORMALITY_KEYWORDS: Tuple[Tuple[str, Tuple[str, ...]], ...] = (
    ("formal", ("wedding", "gala", "black tie", "black-tie", "ball", "opera", "funeral", "ceremony")),
    ("business", ("interview", "meeting", "conference", "office", "presentation", "work", "pitch")),
    ("active", ("hike", "hiking", "gym", "run", "workout", "yoga", "tennis", "ski")),
    ("smart_casual", ("party", "dinner", "date", "concert", "club", "birthday", "drinks", "theatre", "theater")),
)
RAIN_WORDS = ("rain", "drizzle", "shower", "thunderstorm")
SNOW_WORDS = ("snow", "sleet", "blizzard")


def event_formality(event: str) -> str:
    lowered = event.lower()
    for formality, keywords in EVENT_FORMALITY_KEYWORDS:
        if any(re.search(rf"\b{re.escape(keyword)}\b", lowered) for keyword in keywords):
            return formality
    return "casual"


def _apply_gender(template: Template, gender: GenderPreference) -> OutfitDescription:
    outfit, female_overrides = template
    if gender is not GenderPreference.FEMALE or not female_overrides:
        return outfit
    overrides = dict(female_overrides)
    if "accessories" in overrides:
        overrides["accessories"] = tuple(overrides["accessories"])  # type: ignore[arg-type]
    return replace(outfit, **overrides)  # type: ignore[arg-type]


def _weatherproof(outfit: OutfitDescription, conditions: str) -> OutfitDescription:
    lowered = conditions.lower()
    if any(word in lowered for word in SNOW_WORDS):
        return replace(outfit, shoes="insulated waterproof snow boots")
    if any(word in lowered for word in RAIN_WORDS):
        return replace(
            outfit,
            outer="waterproof hooded rain jacket",
            accessories=outfit.accessories + ("compact umbrella",),
        )
    return outfit


class TemplateOutfitGenerator(OutfitGenerator):
    """Offline generator picking curated templates by temperature or formality."""

    def __init__(self, outfit_count: Optional[int] = None) -> None:
        self.outfit_count = outfit_count

    async def generate(
        self,
        gender: GenderPreference,
        weather: WeatherContext | None = None,
        event: str | None = None,
    ) -> List[OutfitDescription]:
        _require_context(weather, event)
        gender = GenderPreference.parse(gender)
        if weather is not None:
            if weather.temp_min is not None and weather.temp_max is not None:
                band = temperature_band(weather.temp_min, weather.temp_max)
            else:
                band = "mild"
            outfits = [_weatherproof(_apply_gender(t, gender), weather.conditions) for t in WEATHER_TEMPLATES[band]]
        else:
            outfits = [_apply_gender(t, gender) for t in EVENT_TEMPLATES[event_formality(event or "")]]
        return outfits[: self.outfit_count] if self.outfit_count else outfits


__all__ = [
    "EVENT_TEMPLATES",
    "GeminiOutfitGenerator",
    "OutfitGenerator",
    "TemplateOutfitGenerator",
    "WEATHER_TEMPLATES",
    "event_formality",
]
