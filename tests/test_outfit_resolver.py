"""Concurrent per-slot resolution of outfit descriptions."""

import asyncio
import uuid
from typing import Dict, List, Tuple

from logic.outfit_resolver import OutfitResolver
from models.garments import GarmentSlot, GenderPreference
from models.outfit import OutfitDescription, Product


def _product(slot: GarmentSlot, label: str) -> Product:
    return Product(
        id=uuid.uuid4().hex,
        title=label,
        link=f"https://shop.example.com/{label}",
        image_url=f"https://img.example.com/{label}.jpg",
        price="$40.00",
        store="EXAMPLE",
        category=slot,
        description=label,
    )


class _ScriptedResolver:
    """Stands in for ProductResolver with per-description delays and payloads."""

    def __init__(self, delays: Dict[str, float], per_call: int = 3, failing: Tuple[str, ...] = ()) -> None:
        self.delays = delays
        self.per_call = per_call
        self.failing = failing
        self.calls: List[Tuple[GarmentSlot, str, GenderPreference]] = []
        self.completed: List[str] = []

    async def resolve(self, category, description, gender=GenderPreference.ANY):
        self.calls.append((category, description, gender))
        await asyncio.sleep(self.delays.get(description, 0))
        self.completed.append(description)
        if description in self.failing:
            return []
        return [_product(category, f"{description}-{index}") for index in range(self.per_call)]


OUTFIT = OutfitDescription(
    name="City Layers",
    top="oxford shirt",
    outer="trench coat",
    bottom="chinos",
    shoes="loafers",
    accessories=("belt", "watch"),
)


def test_products_follow_slot_order_not_completion_order() -> None:
    delays = {"oxford shirt": 0.05, "trench coat": 0.04, "chinos": 0.03, "loafers": 0.02, "belt": 0.01, "watch": 0.0}
    resolver = _ScriptedResolver(delays)

    outfit = asyncio.run(OutfitResolver(resolver).resolve_outfit(OUTFIT, GenderPreference.MALE))

    assert resolver.completed[0] == "watch"
    assert resolver.completed[-1] == "oxford shirt"
    assert [product.category for product in outfit.products] == [
        GarmentSlot.TOP,
        GarmentSlot.OUTER,
        GarmentSlot.BOTTOM,
        GarmentSlot.SHOES,
        GarmentSlot.ACCESSORIES,
        GarmentSlot.ACCESSORIES,
    ]
    assert [product.title for product in outfit.products] == [
        "oxford shirt-0",
        "trench coat-0",
        "chinos-0",
        "loafers-0",
        "belt-0",
        "watch-0",
    ]
    assert all(gender is GenderPreference.MALE for _, _, gender in resolver.calls)


def test_lookups_run_concurrently() -> None:
    delays = {name: 0.2 for name in ("oxford shirt", "trench coat", "chinos", "loafers", "belt", "watch")}
    resolver = _ScriptedResolver(delays)

    async def _timed() -> float:
        loop = asyncio.get_running_loop()
        start = loop.time()
        await OutfitResolver(resolver).resolve_outfit(OUTFIT)
        return loop.time() - start

    assert asyncio.run(_timed()) < 0.8


def test_accessories_keep_first_product_each() -> None:
    outfit = OutfitDescription(accessories=("scarf", "gloves", "beanie"))
    resolver = _ScriptedResolver({}, per_call=5)

    resolved = asyncio.run(OutfitResolver(resolver, products_per_slot=3).resolve_outfit(outfit))

    assert [product.title for product in resolved.products] == ["scarf-0", "gloves-0", "beanie-0"]


def test_singular_slot_cap_is_configurable() -> None:
    outfit = OutfitDescription(top="tee", shoes="sneakers")
    resolver = _ScriptedResolver({}, per_call=5)

    capped = asyncio.run(OutfitResolver(resolver).resolve_outfit(outfit))
    wider = asyncio.run(OutfitResolver(resolver, products_per_slot=2).resolve_outfit(outfit))

    assert len(capped.products) == 2
    assert [product.title for product in wider.products] == ["tee-0", "tee-1", "sneakers-0", "sneakers-1"]


def test_absent_and_failing_slots_contribute_nothing() -> None:
    outfit = OutfitDescription(top="tee", outer=None, bottom="  ", shoes="sandals", accessories=("", "hat"))
    resolver = _ScriptedResolver({}, failing=("sandals",))

    resolved = asyncio.run(OutfitResolver(resolver).resolve_outfit(outfit))

    assert [call[1] for call in resolver.calls] == ["tee", "sandals", "hat"]
    assert [product.title for product in resolved.products] == ["tee-0", "hat-0"]
    assert resolved.description is outfit


def test_outfit_without_slots_resolves_to_no_products() -> None:
    resolver = _ScriptedResolver({})
    resolved = asyncio.run(OutfitResolver(resolver).resolve_outfit(OutfitDescription(name="Empty")))
    assert resolved.products == []
    assert resolver.calls == []
