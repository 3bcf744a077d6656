"""Intents, weather context and the plan results returned to callers."""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Literal, Optional, Union

from models.outfit import Outfit


@dataclass(frozen=True)
class TravelIntent:
    """The user is travelling to ``destination`` around ``date``."""

    destination: str
    date: str
    type: Literal["travel"] = field(default="travel", init=False)


@dataclass(frozen=True)
class EventIntent:
    """The user needs an outfit for a described occasion."""

    description: str
    type: Literal["event"] = field(default="event", init=False)


Intent = Union[TravelIntent, EventIntent]


@dataclass(frozen=True)
class WeatherContext:
    """Forecast summary for a trip; ``warning`` is set only for advisories."""

    destination: str
    date: str
    conditions: str
    temperature_range: str
    warning: Optional[str] = None
    temp_min: Optional[float] = None
    temp_max: Optional[float] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "destination": self.destination,
            "date": self.date,
            "conditions": self.conditions,
            "temperature_range": self.temperature_range,
            "warning": self.warning,
        }


class PlanStatus(str, Enum):
    SUCCESS = "success"
    WARNING = "warning"
    ERROR = "error"


def new_plan_id() -> str:
    return uuid.uuid4().hex


@dataclass
class TravelPlan:
    """Outfits for a trip, with the forecast that shaped them."""

    destination: str
    date: str
    weather: WeatherContext
    outfits: List[Outfit]
    status: PlanStatus
    warning: Optional[str] = None
    id: str = field(default_factory=new_plan_id)
    type: Literal["travel"] = field(default="travel", init=False)

    def to_dict(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {
            "id": self.id,
            "type": self.type,
            "status": self.status.value,
            "destination": self.destination,
            "date": self.date,
            "weather": self.weather.to_dict(),
            "outfits": [outfit.to_dict() for outfit in self.outfits],
        }
        if self.warning:
            payload["warning"] = self.warning
        return payload


@dataclass
class EventPlan:
    """Outfits for a described event."""

    event: str
    outfits: List[Outfit]
    status: PlanStatus = PlanStatus.SUCCESS
    id: str = field(default_factory=new_plan_id)
    type: Literal["event"] = field(default="event", init=False)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "type": self.type,
            "status": self.status.value,
            "event": self.event,
            "outfits": [outfit.to_dict() for outfit in self.outfits],
        }


@dataclass
class ErrorPlan:
    """Terminal failure carrying a human-readable message."""

    error: str
    id: str = field(default_factory=new_plan_id)
    status: PlanStatus = field(default=PlanStatus.ERROR, init=False)
    type: Literal["error"] = field(default="error", init=False)

    def to_dict(self) -> Dict[str, Any]:
        return {"id": self.id, "type": self.type, "status": self.status.value, "error": self.error}


PlanResult = Union[TravelPlan, EventPlan, ErrorPlan]


__all__ = [
    "ErrorPlan",
    "EventIntent",
    "EventPlan",
    "Intent",
    "PlanResult",
    "PlanStatus",
    "TravelIntent",
    "TravelPlan",
    "WeatherContext",
    "new_plan_id",
]
