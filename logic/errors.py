"""Exceptions raised across the outfit planning pipeline."""

from __future__ import annotations

GENERIC_FAILURE_MESSAGE = "Failed to process your request. Please try again."


class PipelineError(Exception):
    """Terminal pipeline failure.

    ``user_message`` is safe to show to the user verbatim; the exception's own
    string may carry upstream details meant for logs only.
    """

    default_user_message = GENERIC_FAILURE_MESSAGE

    def __init__(self, detail: str, user_message: str | None = None) -> None:
        super().__init__(detail)
        self.user_message = user_message or self.default_user_message


class ExtractionError(PipelineError):
    default_user_message = (
        "I couldn't tell whether you're planning a trip or dressing for an event. "
        "Try mentioning a destination and date, or describe the occasion."
    )


class WeatherError(PipelineError):
    default_user_message = "I couldn't get a forecast for that destination and date."


class GenerationError(PipelineError):
    default_user_message = "I couldn't put together outfit suggestions right now. Please try again."


class ImageSearchError(RuntimeError):
    """Raised by image search providers for transport or payload failures."""


class WeatherProviderError(RuntimeError):
    """Raised by weather providers when a forecast cannot be produced."""


__all__ = [
    "ExtractionError",
    "GENERIC_FAILURE_MESSAGE",
    "GenerationError",
    "ImageSearchError",
    "PipelineError",
    "WeatherError",
    "WeatherProviderError",
]
