"""Pydantic schemas for validating LLM replies before they enter the pipeline."""

from __future__ import annotations

from typing import Any, List, Literal, Optional

from pydantic import BaseModel, field_validator, model_validator

from models.outfit import OutfitDescription
from models.plan import EventIntent, Intent, TravelIntent


def _blank_to_none(value: Any) -> Any:
    if isinstance(value, str) and not value.strip():
        return None
    return value


class IntentPayload(BaseModel):
    """Shape returned by the intent extraction prompt."""

    type: Literal["travel", "event"]
    destination: Optional[str] = None
    date: Optional[str] = None
    event: Optional[str] = None

    @field_validator("type", mode="before")
    @classmethod
    def _lower_type(cls, value: Any) -> Any:
        return value.strip().lower() if isinstance(value, str) else value

    @field_validator("destination", "date", "event", mode="before")
    @classmethod
    def _strip_blank(cls, value: Any) -> Any:
        return _blank_to_none(value)

    @model_validator(mode="after")
    def _require_slots(self) -> "IntentPayload":
        if self.type == "travel" and not (self.destination and self.date):
            raise ValueError("travel intent requires destination and date")
        if self.type == "event" and not self.event:
            raise ValueError("event intent requires an event description")
        return self

    def to_intent(self) -> Intent:
        if self.type == "travel":
            return TravelIntent(destination=self.destination.strip(), date=self.date.strip())  # type: ignore[union-attr]
        return EventIntent(description=self.event.strip())  # type: ignore[union-attr]


class OutfitSlotsPayload(BaseModel):
    top: Optional[str] = None
    outer: Optional[str] = None
    bottom: Optional[str] = None
    shoes: Optional[str] = None
    accessories: List[str] = []

    @field_validator("top", "outer", "bottom", "shoes", mode="before")
    @classmethod
    def _strip_blank(cls, value: Any) -> Any:
        return _blank_to_none(value)

    @field_validator("accessories", mode="before")
    @classmethod
    def _coerce_accessories(cls, value: Any) -> Any:
        if value is None:
            return []
        if isinstance(value, str):
            return [value] if value.strip() else []
        return value


class OutfitPayload(BaseModel):
    name: str = "Outfit"
    description: OutfitSlotsPayload
    reasoning: Optional[str] = None

    def to_description(self) -> OutfitDescription:
        slots = self.description
        return OutfitDescription(
            name=self.name,
            top=slots.top,
            outer=slots.outer,
            bottom=slots.bottom,
            shoes=slots.shoes,
            accessories=tuple(item for item in slots.accessories if item and item.strip()),
            notes=self.reasoning,
        )


class OutfitSuggestionsPayload(BaseModel):
    outfits: List[OutfitPayload] = []

    @model_validator(mode="before")
    @classmethod
    def _accept_bare_list(cls, value: Any) -> Any:
        if isinstance(value, list):
            return {"outfits": value}
        return value


__all__ = [
    "IntentPayload",
    "OutfitPayload",
    "OutfitSlotsPayload",
    "OutfitSuggestionsPayload",
]
