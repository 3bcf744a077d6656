"""Per-user planning session: preference snapshot, latest-wins results, transcript."""
from __future__ import annotations

import logging
import time
from collections import deque
from dataclasses import dataclass, field
from typing import Any, Deque, Dict, List, Optional

from agents.orchestrator import OrchestratorAgent, PipelineStage
from memory.preference_store import PreferenceStore
from models.garments import GenderPreference
from models.plan import ErrorPlan, EventPlan, PlanResult, TravelPlan
from stylist_app.logging_config import get_logger, log_event

LOGGER = get_logger(__name__)

DEFAULT_HISTORY_LIMIT = 50


@dataclass
class ChatTurn:
    """Represents one conversational turn."""

    role: str
    content: str
    created_at: float = field(default_factory=lambda: time.time())

    def to_dict(self) -> Dict[str, Any]:
        return {"role": self.role, "content": self.content, "created_at": self.created_at}


def summarize_plan(plan: PlanResult) -> str:
    """Produce the assistant's one-line reply for a settled plan."""

    if isinstance(plan, ErrorPlan):
        return plan.error
    count = len(plan.outfits)
    noun = "outfit" if count == 1 else "outfits"
    if isinstance(plan, TravelPlan):
        weather = plan.weather
        summary = (
            f"{count} {noun} for {plan.destination} on {plan.date}: "
            f"{weather.temperature_range}, {weather.conditions}."
        )
        if plan.warning:
            summary += f" Heads up: {plan.warning}."
        return summary
    if isinstance(plan, EventPlan):
        return f"{count} {noun} for {plan.event}."
    raise TypeError(f"Unknown plan type {type(plan).__name__}")


class PlanSession:
    """Front door for one user's requests.

    Each submission snapshots the gender preference and takes a new generation
    token. Only the most recent submission may publish its plan; results of
    superseded submissions are discarded and ``submit`` returns ``None``.
    The transcript keeps the most recent ``history_limit`` turns.
    """

    def __init__(
        self,
        orchestrator: OrchestratorAgent,
        preference_store: PreferenceStore,
        user_id: str,
        history_limit: int = DEFAULT_HISTORY_LIMIT,
    ) -> None:
        self.orchestrator = orchestrator
        self.preference_store = preference_store
        self.user_id = user_id
        stored = preference_store.get(user_id)
        self.needs_preference = stored is None
        self.gender = stored or GenderPreference.ANY
        self.latest_plan: Optional[PlanResult] = None
        self.stage = PipelineStage.IDLE
        self.history: Deque[ChatTurn] = deque(maxlen=history_limit)
        self._generation = 0

    @property
    def generation(self) -> int:
        return self._generation

    def set_gender(self, gender: GenderPreference | str) -> GenderPreference:
        self.gender = GenderPreference.parse(gender)
        self.preference_store.set(self.user_id, self.gender)
        self.needs_preference = False
        log_event(LOGGER, logging.INFO, "preference_updated", user_id=self.user_id, gender=self.gender.value)
        return self.gender

    def _is_current(self, token: int) -> bool:
        return token == self._generation

    async def submit(self, text: str) -> Optional[PlanResult]:
        self._generation += 1
        token = self._generation
        gender = self.gender
        self.history.append(ChatTurn(role="user", content=text))

        def track(stage: PipelineStage) -> None:
            if self._is_current(token):
                self.stage = stage

        plan = await self.orchestrator.plan(text, gender, observer=track)

        if not self._is_current(token):
            log_event(
                LOGGER,
                logging.INFO,
                "stale_result_discarded",
                generation=token,
                latest_generation=self._generation,
                plan_type=plan.type,
            )
            return None

        self.latest_plan = plan
        self.history.append(ChatTurn(role="assistant", content=summarize_plan(plan)))
        return plan

    def transcript(self) -> List[Dict[str, Any]]:
        return [turn.to_dict() for turn in self.history]


__all__ = ["ChatTurn", "PlanSession", "summarize_plan"]
