"""Intent agents: classify a message as trip planning or event dressing."""

from __future__ import annotations

import logging
import re
from abc import ABC, abstractmethod
from datetime import date
from typing import Callable, Optional

from pydantic import ValidationError

from logic.date_phrases import is_calendar_word, resolve_date_phrase, strip_date_phrases
from logic.errors import ExtractionError
from logic.safety import system_instruction
from logic.validation import IntentPayload
from models.plan import EventIntent, Intent, TravelIntent
from stylist_app.logging_config import get_logger, log_event, operation_context
from tools.gemini_client import GeminiJSONClient

LOGGER = get_logger(__name__)

EMPTY_MESSAGE = "Tell me where you're travelling or what occasion you're dressing for."

TRAVEL_KEYWORDS = (
    "trip",
    "travel",
    "traveling",
    "travelling",
    "vacation",
    "holiday",
    "getaway",
    "flying",
    "flight",
    "visit",
    "visiting",
)
_DESTINATION = re.compile(
    r"\b(?i:to|in|visit|visiting|at)\s+((?:[A-Z][\w'’.-]*)(?:\s+[A-Z][\w'’.-]*)*)"
)
_EVENT_FILLER = re.compile(
    r"^(?:i\s*(?:'m|’m|am)?\s*(?:have|got|going\s+to|attending|invited\s+to|dressing\s+for|need\s+an?\s+outfit\s+for)\s+)"
    r"(?:a|an|my|the)?\s*",
    re.IGNORECASE,
)


class IntentExtractor(ABC):
    """Abstract intent extraction interface."""

    @abstractmethod
    async def extract(self, text: str) -> Intent:
        """Classify ``text``; raise :class:`ExtractionError` when that fails."""


def find_destination(text: str) -> Optional[str]:
    """Return the first capitalised place name after to/in/visit/at."""

    for match in _DESTINATION.finditer(text):
        words = []
        for word in match.group(1).split():
            if is_calendar_word(word) or word.lower() in {"next", "this", "i"}:
                break
            words.append(word.rstrip(".,!?"))
        if words:
            return " ".join(words)
    return None


def event_description(text: str) -> str:
    """Reduce an event request to its occasion, e.g. "Job interview"."""

    description = strip_date_phrases(text).strip(" .,!?")
    description = _EVENT_FILLER.sub("", description).strip(" .,!?")
    return description or text.strip()


class KeywordIntentExtractor(IntentExtractor):
    """Offline deterministic extractor driven by keywords and date phrases."""

    def __init__(self, today: Callable[[], date] = date.today) -> None:
        self.today = today

    async def extract(self, text: str) -> Intent:
        if not text or not text.strip():
            raise ExtractionError("empty message", EMPTY_MESSAGE)

        lowered = text.lower()
        destination = find_destination(text)
        is_travel = any(re.search(rf"\b{keyword}\b", lowered) for keyword in TRAVEL_KEYWORDS)
        if destination and (is_travel or re.search(rf"\bto\s+{re.escape(destination)}", text)):
            travel_date = resolve_date_phrase(text, self.today())
            return TravelIntent(destination=destination, date=travel_date.isoformat())
        if is_travel:
            raise ExtractionError(
                "travel request without destination",
                "Where are you headed? Tell me the destination and roughly when.",
            )
        return EventIntent(description=event_description(text))


class GeminiIntentExtractor(IntentExtractor):
    """LLM-backed extractor returning validated JSON."""

    def __init__(self, client: GeminiJSONClient, today: Callable[[], date] = date.today) -> None:
        self.client = client
        self.today = today

    @classmethod
    def from_model(cls, model: str, api_key: str | None) -> "GeminiIntentExtractor":
        instruction = system_instruction(
            "intent classifier. Decide whether the user is planning travel or dressing for an event"
        )
        return cls(GeminiJSONClient(model=model, system_instruction=instruction, api_key=api_key, temperature=0.0))

    def _prompt(self, text: str) -> str:
        return (
            f"Today is {self.today().isoformat()}.\n"
            "Classify the message below.\n"
            'For travel reply {"type": "travel", "destination": <city or place>, "date": <YYYY-MM-DD>}, '
            "resolving relative dates against today.\n"
            'For anything else reply {"type": "event", "event": <short occasion description>}.\n'
            f"Message: {text}"
        )

    async def extract(self, text: str) -> Intent:
        if not text or not text.strip():
            raise ExtractionError("empty message", EMPTY_MESSAGE)

        with operation_context("agent:intent.extract") as correlation_id:
            try:
                raw = await self.client.generate_json(self._prompt(text))
                intent = IntentPayload.model_validate(raw).to_intent()
            except ValidationError as exc:
                raise ExtractionError(f"intent payload failed validation: {exc.error_count()} errors") from exc
            except Exception as exc:
                raise ExtractionError(f"intent extraction failed: {type(exc).__name__}") from exc

            log_event(
                LOGGER,
                level=logging.INFO,
                event="agent_call_completed",
                agent="intent",
                method="extract",
                correlation_id=correlation_id,
                intent=intent.type,
            )
            return intent


__all__ = [
    "GeminiIntentExtractor",
    "IntentExtractor",
    "KeywordIntentExtractor",
    "event_description",
    "find_destination",
]
