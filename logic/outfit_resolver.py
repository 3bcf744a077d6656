"""Fan out product resolution across the garment slots of one outfit."""

from __future__ import annotations

import asyncio
import logging
from typing import Awaitable, List, Tuple

from models.garments import GarmentSlot, GenderPreference
from models.outfit import Outfit, OutfitDescription, Product
from stylist_app.logging_config import get_logger, log_event
from tools.product_resolver import ProductResolver

LOGGER = get_logger(__name__)


class OutfitResolver:
    """Attach products to an outfit description.

    Each present singular slot keeps at most ``products_per_slot`` products and
    each accessory item keeps only its first product. Calls run concurrently;
    the product list is assembled in slot declaration order (top, outer,
    bottom, shoes, then accessories as listed).
    """

    def __init__(self, product_resolver: ProductResolver, products_per_slot: int = 1) -> None:
        self.product_resolver = product_resolver
        self.products_per_slot = max(1, products_per_slot)

    def _lookups(
        self, outfit: OutfitDescription, gender: GenderPreference
    ) -> List[Tuple[GarmentSlot, int, Awaitable[List[Product]]]]:
        lookups: List[Tuple[GarmentSlot, int, Awaitable[List[Product]]]] = []
        for slot, description in outfit.singular_slots():
            lookups.append(
                (slot, self.products_per_slot, self.product_resolver.resolve(slot, description, gender))
            )
        for accessory in outfit.accessory_items():
            lookups.append(
                (
                    GarmentSlot.ACCESSORIES,
                    1,
                    self.product_resolver.resolve(GarmentSlot.ACCESSORIES, accessory, gender),
                )
            )
        return lookups

    async def resolve_outfit(
        self, outfit: OutfitDescription, gender: GenderPreference | str = GenderPreference.ANY
    ) -> Outfit:
        gender = GenderPreference.parse(gender)
        lookups = self._lookups(outfit, gender)
        # gather returns results in submission order, whatever order they finish in.
        results = await asyncio.gather(*(lookup for _, _, lookup in lookups))

        products: List[Product] = []
        empty_slots: List[str] = []
        for (slot, limit, _), slot_products in zip(lookups, results):
            if not slot_products:
                empty_slots.append(slot.value)
            products.extend(slot_products[:limit])

        log_event(
            LOGGER,
            logging.INFO,
            "outfit_resolved",
            outfit=outfit.name,
            lookups=len(lookups),
            product_count=len(products),
            empty_slots=empty_slots,
        )
        return Outfit(description=outfit, products=products)


__all__ = ["OutfitResolver"]
