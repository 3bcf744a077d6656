"""Travel Stylist app bootstrap."""

from __future__ import annotations

import logging
import random
from collections import OrderedDict
from datetime import date
from typing import Callable, Optional

from agents.intent_agent import GeminiIntentExtractor, IntentExtractor, KeywordIntentExtractor
from agents.orchestrator import OrchestratorAgent
from agents.outfit_generator_agent import GeminiOutfitGenerator, OutfitGenerator, TemplateOutfitGenerator
from agents.weather_agent import WeatherAgent
from logic.outfit_resolver import OutfitResolver
from memory.plan_session import PlanSession
from memory.preference_store import InMemoryPreferenceStore, JSONPreferenceStore, PreferenceStore
from models.plan import PlanResult
from stylist_app.config import StylistConfig
from stylist_app.logging_config import configure_logging, get_logger, log_event, operation_context
from tools.image_search import GoogleImageSearchProvider, ImageSearchProvider, StaticImageSearchProvider
from tools.product_resolver import ProductResolver
from tools.weather_provider import MockWeatherProvider, OpenWeatherProvider, WeatherProvider

LOGGER = get_logger(__name__)


class TravelStylistApp:
    """Wires together the pipeline agents, tools and per-user sessions.

    Collaborators whose credentials are missing from the config fall back to
    their offline implementations; any collaborator can also be passed in
    directly, which is how the tests and the evaluation harness run.
    """

    def __init__(
        self,
        config: StylistConfig | None = None,
        *,
        intent_extractor: IntentExtractor | None = None,
        weather_provider: WeatherProvider | None = None,
        outfit_generator: OutfitGenerator | None = None,
        search_provider: ImageSearchProvider | None = None,
        preference_store: PreferenceStore | None = None,
        rng: random.Random | None = None,
        today: Callable[[], date] = date.today,
    ) -> None:
        self.config = config or StylistConfig.from_env()
        configure_logging()

        self.intent_extractor = intent_extractor or self._build_intent_extractor(today)
        self.weather_provider = weather_provider or self._build_weather_provider()
        self.outfit_generator = outfit_generator or self._build_outfit_generator()
        self.search_provider = search_provider or self._build_search_provider()
        self.preference_store = preference_store or self._build_preference_store()

        self.product_resolver = ProductResolver(
            self.search_provider,
            result_count=self.config.search_result_count,
            rng=rng,
        )
        self.outfit_resolver = OutfitResolver(
            self.product_resolver, products_per_slot=self.config.products_per_slot
        )
        self.weather_agent = WeatherAgent(self.weather_provider)
        self.orchestrator = OrchestratorAgent(
            intent_extractor=self.intent_extractor,
            weather_agent=self.weather_agent,
            outfit_generator=self.outfit_generator,
            outfit_resolver=self.outfit_resolver,
        )
        self._sessions: OrderedDict[str, PlanSession] = OrderedDict()

        log_event(
            LOGGER,
            level=logging.INFO,
            event="app_wired",
            llm=self.config.llm_enabled and intent_extractor is None,
            search=type(self.search_provider).__name__,
            weather=type(self.weather_provider).__name__,
            environment=self.config.environment,
        )

    def _build_intent_extractor(self, today: Callable[[], date]) -> IntentExtractor:
        if self.config.llm_enabled:
            extractor = GeminiIntentExtractor.from_model(self.config.model, self.config.google_api_key)
            extractor.today = today
            return extractor
        return KeywordIntentExtractor(today=today)

    def _build_outfit_generator(self) -> OutfitGenerator:
        if self.config.llm_enabled:
            return GeminiOutfitGenerator.from_model(self.config.model, self.config.google_api_key)
        return TemplateOutfitGenerator()

    def _build_weather_provider(self) -> WeatherProvider:
        if self.config.openweather_api_key:
            return OpenWeatherProvider(
                api_key=self.config.openweather_api_key,
                timeout_seconds=self.config.request_timeout_seconds,
            )
        return MockWeatherProvider()

    def _build_search_provider(self) -> ImageSearchProvider:
        if self.config.search_enabled:
            return GoogleImageSearchProvider(
                api_key=self.config.search_api_key or "",
                engine_id=self.config.search_engine_id or "",
                timeout_seconds=self.config.request_timeout_seconds,
            )
        return StaticImageSearchProvider()

    def _build_preference_store(self) -> PreferenceStore:
        if self.config.preference_store_path:
            return JSONPreferenceStore(self.config.preference_store_path)
        return InMemoryPreferenceStore()

    def session(self, user_id: str) -> PlanSession:
        """Return the user's session, creating it on first use.

        At most ``config.max_sessions`` sessions are cached; the least recently
        used one is dropped first. Preferences survive in the store.
        """

        session = self._sessions.get(user_id)
        if session is not None:
            self._sessions.move_to_end(user_id)
            return session

        session = PlanSession(
            self.orchestrator, self.preference_store, user_id, history_limit=self.config.history_limit
        )
        self._sessions[user_id] = session
        while len(self._sessions) > max(self.config.max_sessions, 1):
            evicted, _ = self._sessions.popitem(last=False)
            log_event(LOGGER, logging.INFO, "session_evicted", user_id=evicted)
        return session

    async def submit(self, user_id: str, message: str) -> Optional[PlanResult]:
        """Run ``message`` through the user's session; ``None`` when superseded."""

        with operation_context("app:submit"):
            return await self.session(user_id).submit(message)


__all__ = ["TravelStylistApp"]
