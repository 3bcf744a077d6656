"""Image search provider abstractions and implementations."""

from __future__ import annotations

import asyncio
import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Dict, List, Mapping, Optional, Sequence

import requests
from pydantic import BaseModel, ValidationError

from logic.errors import ImageSearchError
from tools.observability import instrument_tool

LOGGER = logging.getLogger(__name__)

GOOGLE_CSE_URL = "https://www.googleapis.com/customsearch/v1"


class _ImageMeta(BaseModel):
    contextLink: str = ""


class _SearchItem(BaseModel):
    title: str = ""
    link: str = ""
    displayLink: str = ""
    snippet: Optional[str] = None
    image: Optional[_ImageMeta] = None


class _SearchResponse(BaseModel):
    items: Optional[List[_SearchItem]] = None


@dataclass(frozen=True)
class SearchResult:
    """One raw image hit, independent of the provider that produced it."""

    title: str
    link: str
    image: str
    display_link: str
    context_link: Optional[str] = None
    snippet: Optional[str] = None


class ImageSearchProvider(ABC):
    """Abstract image search interface."""

    @abstractmethod
    async def search(self, query: str, result_count: int) -> List[SearchResult]:
        """Return at most ``result_count`` image results for ``query``."""


class GoogleImageSearchProvider(ImageSearchProvider):
    """Google Custom Search JSON API in image mode."""

    def __init__(
        self,
        api_key: str,
        engine_id: str,
        timeout_seconds: float = 10.0,
        country: str = "us",
        session: requests.Session | None = None,
    ) -> None:
        self.api_key = api_key
        self.engine_id = engine_id
        self.timeout_seconds = timeout_seconds
        self.country = country
        self.session = session or requests.Session()

    def _to_result(self, item: _SearchItem) -> SearchResult:
        return SearchResult(
            title=item.title,
            link=item.link,
            image=item.link,
            display_link=item.displayLink,
            context_link=item.image.contextLink if item.image else None,
            snippet=item.snippet,
        )

    def _search_blocking(self, query: str, result_count: int) -> List[SearchResult]:
        params = {
            "key": self.api_key,
            "cx": self.engine_id,
            "q": query,
            "num": str(result_count),
            "searchType": "image",
            "gl": self.country,
        }
        try:
            response = self.session.get(GOOGLE_CSE_URL, params=params, timeout=self.timeout_seconds)
            response.raise_for_status()
            parsed = _SearchResponse.model_validate(response.json())
        except requests.RequestException as exc:
            raise ImageSearchError(f"Image search request failed: {exc}") from exc
        except (ValidationError, ValueError) as exc:
            raise ImageSearchError(f"Malformed image search payload: {exc}") from exc
        return [self._to_result(item) for item in (parsed.items or [])][:result_count]

    @instrument_tool("image_search")
    async def search(self, query: str, result_count: int) -> List[SearchResult]:
        return await asyncio.to_thread(self._search_blocking, query, result_count)


class StaticImageSearchProvider(ImageSearchProvider):
    """Offline provider returning canned results.

    ``responses`` maps a keyword to the results returned when the query
    contains it; otherwise ``default`` is returned. Every query is recorded.
    """

    def __init__(
        self,
        default: Sequence[SearchResult] = (),
        responses: Mapping[str, Sequence[SearchResult]] | None = None,
    ) -> None:
        self.default = list(default)
        self.responses: Dict[str, List[SearchResult]] = {
            keyword.lower(): list(results) for keyword, results in (responses or {}).items()
        }
        self.queries: List[str] = []

    async def search(self, query: str, result_count: int) -> List[SearchResult]:
        self.queries.append(query)
        lowered = query.lower()
        for keyword, results in self.responses.items():
            if keyword in lowered:
                return results[:result_count]
        return self.default[:result_count]


__all__ = [
    "GoogleImageSearchProvider",
    "ImageSearchProvider",
    "SearchResult",
    "StaticImageSearchProvider",
]
