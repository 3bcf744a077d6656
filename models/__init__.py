"""Model package exports."""

from models.garments import GarmentSlot, GenderPreference, SINGULAR_SLOTS, SLOT_ORDER
from models.outfit import Outfit, OutfitDescription, Product
from models.plan import (
    ErrorPlan,
    EventIntent,
    EventPlan,
    Intent,
    PlanResult,
    PlanStatus,
    TravelIntent,
    TravelPlan,
    WeatherContext,
)

__all__ = [
    "ErrorPlan",
    "EventIntent",
    "EventPlan",
    "GarmentSlot",
    "GenderPreference",
    "Intent",
    "Outfit",
    "OutfitDescription",
    "PlanResult",
    "PlanStatus",
    "Product",
    "SINGULAR_SLOTS",
    "SLOT_ORDER",
    "TravelIntent",
    "TravelPlan",
    "WeatherContext",
]
