"""Thin async wrapper around Gemini for JSON-only completions."""

from __future__ import annotations

import json
from typing import Any

import google.generativeai as genai

from tools.observability import instrument_tool


class GeminiJSONClient:
    """Send a prompt and decode the model's JSON reply.

    Transport errors and undecodable replies propagate; the calling agent
    translates them into its own pipeline error.
    """

    def __init__(
        self,
        model: str,
        system_instruction: str,
        api_key: str | None = None,
        temperature: float = 0.4,
    ) -> None:
        if api_key:
            genai.configure(api_key=api_key)
        self.model_name = model
        self._model = genai.GenerativeModel(
            model_name=model,
            system_instruction=system_instruction,
            generation_config={"response_mime_type": "application/json", "temperature": temperature},
        )

    @instrument_tool("gemini_generate_json")
    async def generate_json(self, prompt: str) -> Any:
        response = await self._model.generate_content_async(prompt)
        return json.loads(response.text)


__all__ = ["GeminiJSONClient"]
