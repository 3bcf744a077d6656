"""Outfit descriptions, shoppable products and resolved outfits."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any, Dict, Iterator, List, Optional, Tuple

from models.garments import GarmentSlot, SINGULAR_SLOTS


@dataclass(frozen=True)
class OutfitDescription:
    """Abstract outfit: one text description per garment slot."""

    name: str = "Outfit"
    top: Optional[str] = None
    outer: Optional[str] = None
    bottom: Optional[str] = None
    shoes: Optional[str] = None
    accessories: Tuple[str, ...] = ()
    notes: Optional[str] = None

    def slot_description(self, slot: GarmentSlot) -> Optional[str]:
        if slot is GarmentSlot.ACCESSORIES:
            raise ValueError("accessories is multi-valued; use .accessories")
        value = getattr(self, slot.value)
        return value.strip() if value and value.strip() else None

    def singular_slots(self) -> Iterator[Tuple[GarmentSlot, str]]:
        """Yield present singular slots in declaration order."""

        for slot in SINGULAR_SLOTS:
            description = self.slot_description(slot)
            if description:
                yield slot, description

    def accessory_items(self) -> List[str]:
        return [item.strip() for item in self.accessories if item and item.strip()]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "description": {
                "top": self.top,
                "outer": self.outer,
                "bottom": self.bottom,
                "shoes": self.shoes,
                "accessories": list(self.accessories),
            },
            "notes": self.notes,
        }


@dataclass
class Product:
    """A concrete, shoppable product found for one garment slot."""

    id: str
    title: str
    link: str
    image_url: str
    price: str
    store: str
    category: GarmentSlot
    description: str

    @property
    def is_valid(self) -> bool:
        return bool(self.link and self.image_url)

    def to_dict(self) -> Dict[str, Any]:
        payload = asdict(self)
        payload["category"] = self.category.value
        return payload


@dataclass
class Outfit:
    """An outfit description together with its resolved products."""

    description: OutfitDescription
    products: List[Product] = field(default_factory=list)

    @property
    def name(self) -> str:
        return self.description.name

    def to_dict(self) -> Dict[str, Any]:
        payload = self.description.to_dict()
        payload["products"] = [product.to_dict() for product in self.products]
        return payload


__all__ = ["Outfit", "OutfitDescription", "Product"]
