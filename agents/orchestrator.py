"""Root orchestrator sequencing intent, weather, generation and product resolution."""

from __future__ import annotations

import asyncio
import logging
from enum import Enum
from typing import Callable, List, Optional, Sequence

from agents.intent_agent import IntentExtractor
from agents.outfit_generator_agent import OutfitGenerator
from agents.weather_agent import WeatherAgent
from logic.errors import GENERIC_FAILURE_MESSAGE, ExtractionError, PipelineError
from logic.outfit_resolver import OutfitResolver
from models.garments import GenderPreference
from models.outfit import Outfit, OutfitDescription
from models.plan import ErrorPlan, EventIntent, EventPlan, PlanResult, PlanStatus, TravelIntent, TravelPlan
from stylist_app.logging_config import get_logger, log_event, operation_context

LOGGER = get_logger(__name__)


class PipelineStage(str, Enum):
    IDLE = "idle"
    EXTRACTING = "extracting"
    FETCHING_WEATHER = "fetching_weather"
    GENERATING_OUTFITS = "generating_outfits"
    RESOLVING_PRODUCTS = "resolving_products"
    SETTLED = "settled"


StageObserver = Callable[[PipelineStage], None]


class OrchestratorAgent:
    """Runs one request end to end and always settles on a plan result.

    Stage failures are terminal: a :class:`PipelineError` becomes an
    :class:`ErrorPlan` carrying its user-safe message, anything else becomes an
    :class:`ErrorPlan` with a generic message. Nothing is retried.
    """

    def __init__(
        self,
        intent_extractor: IntentExtractor,
        weather_agent: WeatherAgent,
        outfit_generator: OutfitGenerator,
        outfit_resolver: OutfitResolver,
    ) -> None:
        self.intent_extractor = intent_extractor
        self.weather_agent = weather_agent
        self.outfit_generator = outfit_generator
        self.outfit_resolver = outfit_resolver

    async def plan(
        self,
        text: str,
        gender: GenderPreference | str = GenderPreference.ANY,
        observer: Optional[StageObserver] = None,
    ) -> PlanResult:
        """Turn a free-text request into a travel, event or error plan."""

        gender = GenderPreference.parse(gender)
        with operation_context("agent:orchestrator.plan") as correlation_id:
            log_event(
                LOGGER,
                level=logging.INFO,
                event="agent_call_started",
                agent="orchestrator",
                method="plan",
                correlation_id=correlation_id,
                gender=gender.value,
            )
            stage = PipelineStage.IDLE

            def enter(next_stage: PipelineStage) -> None:
                nonlocal stage
                stage = next_stage
                log_event(LOGGER, logging.DEBUG, "pipeline_stage", stage=stage.value)
                if observer is not None:
                    observer(stage)

            try:
                result = await self._run(text, gender, enter)
            except PipelineError as exc:
                log_event(
                    LOGGER,
                    level=logging.WARNING,
                    event="pipeline_failed",
                    stage=stage.value,
                    error_type=type(exc).__name__,
                    details=str(exc),
                )
                result = ErrorPlan(error=exc.user_message)
            except Exception:
                log_event(
                    LOGGER,
                    level=logging.ERROR,
                    event="pipeline_crashed",
                    stage=stage.value,
                    exc_info=True,
                )
                result = ErrorPlan(error=GENERIC_FAILURE_MESSAGE)

            enter(PipelineStage.SETTLED)
            log_event(
                LOGGER,
                level=logging.INFO,
                event="agent_call_completed",
                agent="orchestrator",
                method="plan",
                correlation_id=correlation_id,
                plan_type=result.type,
                status=result.status.value,
                outfit_count=len(getattr(result, "outfits", [])),
            )
            return result

    async def _run(self, text: str, gender: GenderPreference, enter: StageObserver) -> PlanResult:
        enter(PipelineStage.EXTRACTING)
        intent = await self.intent_extractor.extract(text)

        if isinstance(intent, TravelIntent):
            enter(PipelineStage.FETCHING_WEATHER)
            weather = await self.weather_agent.forecast(intent.destination, intent.date)
            enter(PipelineStage.GENERATING_OUTFITS)
            descriptions = await self.outfit_generator.generate(gender, weather=weather)
            outfits = await self._resolve_all(descriptions, gender, enter)
            return TravelPlan(
                destination=intent.destination,
                date=weather.date,
                weather=weather,
                outfits=outfits,
                status=PlanStatus.WARNING if weather.warning else PlanStatus.SUCCESS,
                warning=weather.warning,
            )

        if isinstance(intent, EventIntent):
            enter(PipelineStage.GENERATING_OUTFITS)
            descriptions = await self.outfit_generator.generate(gender, event=intent.description)
            outfits = await self._resolve_all(descriptions, gender, enter)
            return EventPlan(event=intent.description, outfits=outfits, status=PlanStatus.SUCCESS)

        raise ExtractionError(f"unsupported intent {type(intent).__name__}")

    async def _resolve_all(
        self, descriptions: Sequence[OutfitDescription], gender: GenderPreference, enter: StageObserver
    ) -> List[Outfit]:
        enter(PipelineStage.RESOLVING_PRODUCTS)
        resolved = await asyncio.gather(
            *(self.outfit_resolver.resolve_outfit(description, gender) for description in descriptions)
        )
        return list(resolved)


__all__ = ["OrchestratorAgent", "PipelineStage", "StageObserver"]
