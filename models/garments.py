"""Garment slot and gender preference vocabularies."""

from __future__ import annotations

from enum import Enum
from typing import Tuple


class GenderPreference(str, Enum):
    """Clothing style preference used for generation and product search."""

    MALE = "male"
    FEMALE = "female"
    ANY = "any"

    @classmethod
    def parse(cls, value: "str | GenderPreference | None") -> "GenderPreference":
        """Coerce loose input into a preference, defaulting to ``ANY``."""

        if isinstance(value, cls):
            return value
        if not value:
            return cls.ANY
        cleaned = str(value).strip().lower()
        aliases = {"men": "male", "man": "male", "women": "female", "woman": "female"}
        cleaned = aliases.get(cleaned, cleaned)
        try:
            return cls(cleaned)
        except ValueError as exc:
            raise ValueError(f"Unsupported gender preference: {value}") from exc

    @property
    def qualifier(self) -> str:
        """Possessive search qualifier, empty for ``ANY``."""

        return {"male": "men's", "female": "women's"}.get(self.value, "")


class GarmentSlot(str, Enum):
    """A garment position within an outfit."""

    TOP = "top"
    OUTER = "outer"
    BOTTOM = "bottom"
    SHOES = "shoes"
    ACCESSORIES = "accessories"

    @property
    def search_term(self) -> str:
        """Category word appended to product searches."""

        return SEARCH_TERMS.get(self, self.value)


SINGULAR_SLOTS: Tuple[GarmentSlot, ...] = (
    GarmentSlot.TOP,
    GarmentSlot.OUTER,
    GarmentSlot.BOTTOM,
    GarmentSlot.SHOES,
)
SLOT_ORDER: Tuple[GarmentSlot, ...] = SINGULAR_SLOTS + (GarmentSlot.ACCESSORIES,)
SEARCH_TERMS = {GarmentSlot.OUTER: "outerwear"}


__all__ = ["GarmentSlot", "GenderPreference", "SEARCH_TERMS", "SINGULAR_SLOTS", "SLOT_ORDER"]
