"""Resolve one garment description into shoppable products via image search."""

from __future__ import annotations

import logging
import random
import re
import uuid
from typing import Dict, List, Sequence, Tuple

from logic.gender_normalizer import normalize
from models.garments import GarmentSlot, GenderPreference
from models.outfit import Product
from stylist_app.logging_config import get_logger, log_event
from tools.image_search import ImageSearchProvider, SearchResult

LOGGER = get_logger(__name__)

RETAIL_STORES: Tuple[Tuple[str, str], ...] = (
    ("prada.com", "PRADA"),
    ("gucci.com", "GUCCI"),
    ("louisvuitton.com", "LOUIS VUITTON"),
    ("nordstrom.com", "Nordstrom"),
    ("macys.com", "Macy's"),
    ("asos.com", "ASOS"),
    ("zara.com", "ZARA"),
    ("hm.com", "H&M"),
    ("target.com", "Target"),
    ("uniqlo.com", "UNIQLO"),
    ("forever21.com", "Forever 21"),
    ("fashionnova.com", "Fashion Nova"),
    ("shein.com", "SHEIN"),
)
STORE_NAMES: Dict[str, str] = dict(RETAIL_STORES)
SITE_RESTRICTION = "(" + " OR ".join(f"site:{domain}" for domain, _ in RETAIL_STORES) + ")"
DEFAULT_RESULT_COUNT = 6
# Placeholder price band; the search provider returns no pricing.
PRICE_RANGE = (30, 179)
_TITLE_DELIMITER = re.compile(r"[|\-]")


def build_search_query(category: GarmentSlot, description: str, gender: GenderPreference) -> str:
    """Compose the image search query for one garment."""

    phrase = normalize(description, category, gender)
    return f"{phrase} clothing {SITE_RESTRICTION}"


def _host(display_link: str) -> str:
    host = (display_link or "").strip().lower()
    host = re.sub(r"^[a-z]+://", "", host).split("/", 1)[0]
    return host[4:] if host.startswith("www.") else host


def store_name(display_link: str) -> str:
    """Map a result's display domain to a brand name.

    Unknown domains fall back to the uppercased second-level label, so
    ``shop.example.co`` becomes ``EXAMPLE``.
    """

    host = _host(display_link)
    for domain, name in STORE_NAMES.items():
        if host == domain or host.endswith("." + domain):
            return name
    labels = [label for label in host.split(".") if label]
    bare = labels[-2] if len(labels) >= 2 else (labels[0] if labels else "")
    return bare.upper()


def clean_title(raw_title: str, fallback: str) -> str:
    title = _TITLE_DELIMITER.split(raw_title or "", maxsplit=1)[0].strip()
    return title or fallback


class ProductResolver:
    """Search products for a single garment slot.

    ``resolve`` never raises: provider failures, malformed payloads and empty
    result sets all come back as an empty list so one bad category cannot void
    the outfit it belongs to.
    """

    def __init__(
        self,
        provider: ImageSearchProvider,
        result_count: int = DEFAULT_RESULT_COUNT,
        rng: random.Random | None = None,
    ) -> None:
        self.provider = provider
        self.result_count = result_count
        self.rng = rng or random.Random()

    def _price(self) -> str:
        low, high = PRICE_RANGE
        return f"${self.rng.randint(low, high)}.00"

    def to_product(self, result: SearchResult, category: GarmentSlot, description: str) -> Product:
        return Product(
            id=uuid.uuid4().hex,
            title=clean_title(result.title, description),
            link=result.context_link or result.link or "",
            image_url=result.image or "",
            price=self._price(),
            store=store_name(result.display_link),
            category=category,
            description=result.snippet or description,
        )

    def to_products(
        self, results: Sequence[SearchResult], category: GarmentSlot, description: str
    ) -> List[Product]:
        products = [self.to_product(result, category, description) for result in results]
        return [product for product in products if product.is_valid]

    async def resolve(
        self,
        category: GarmentSlot | str,
        description: str,
        gender: GenderPreference | str = GenderPreference.ANY,
    ) -> List[Product]:
        try:
            category = GarmentSlot(category)
            gender = GenderPreference.parse(gender)
            query = build_search_query(category, description, gender)
            results = await self.provider.search(query, self.result_count)
            products = self.to_products(results or [], category, description)
        except Exception as exc:
            log_event(
                LOGGER,
                logging.WARNING,
                "resolution_failure",
                category=getattr(category, "value", category),
                reason=type(exc).__name__,
                details=str(exc),
            )
            return []

        if not products:
            log_event(
                LOGGER,
                logging.INFO,
                "resolution_empty",
                category=category.value,
                raw_results=len(results or []),
            )
        return products


__all__ = [
    "ProductResolver",
    "RETAIL_STORES",
    "SITE_RESTRICTION",
    "build_search_query",
    "clean_title",
    "store_name",
]
