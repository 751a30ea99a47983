"""
Async Gemini client used by the profile, translation and news adapters.

Wraps the google-genai SDK with:
- API key resolution from settings (GEMINI_API_KEY)
- A hard timeout per call (asyncio.wait_for)
- JSON-mode generation against a response schema
- Search-grounded generation for news
"""

from __future__ import annotations

import asyncio
import json
import logging
from typing import Any, Dict, Optional

from google import genai
from google.genai import types

from ..config import Settings, get_settings

logger = logging.getLogger(__name__)


class GeminiClient:
    """
    Thin async facade over ``genai.Client``.

    Attributes:
        model_name: Gemini model used for every call.
        timeout: Seconds before a call is abandoned.
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        model_name: Optional[str] = None,
        timeout: Optional[float] = None,
        settings: Optional[Settings] = None,
    ) -> None:
        """
        Args:
            api_key: Google AI API key. Falls back to ``Settings.gemini_api_key``.
            model_name: Model override, defaults to ``Settings.gemini_model``.
            timeout: Per-call timeout override in seconds.
            settings: Settings instance, defaults to the cached singleton.

        Raises:
            ValueError: If no API key is provided or configured.
        """
        settings = settings or get_settings()
        api_key = api_key or settings.gemini_api_key
        if not api_key:
            raise ValueError(
                "No API key provided. Set GEMINI_API_KEY environment variable "
                "or pass api_key parameter."
            )

        self.client = genai.Client(api_key=api_key)
        self.model_name = model_name or settings.gemini_model
        self.timeout = timeout if timeout is not None else settings.gemini_timeout

    async def generate_content(
        self,
        prompt: str,
        config: Optional[types.GenerateContentConfig] = None,
    ) -> types.GenerateContentResponse:
        """
        Run one generation request.

        Raises:
            asyncio.TimeoutError: If the call exceeds ``timeout``.
            google.genai.errors.APIError: For API-side failures.
        """
        logger.debug("Gemini request: model=%s, prompt_chars=%s", self.model_name, len(prompt))
        return await asyncio.wait_for(
            self.client.aio.models.generate_content(
                model=self.model_name,
                contents=prompt,
                config=config,
            ),
            timeout=self.timeout,
        )

    async def generate_json(self, prompt: str, response_schema: Dict[str, Any]) -> Any:
        """
        Generate structured output and decode it.

        Raises:
            ValueError: If the model returned no text or invalid JSON.
        """
        config = types.GenerateContentConfig(
            response_mime_type="application/json",
            response_schema=response_schema,
        )
        response = await self.generate_content(prompt, config)
        text = response.text
        if not text:
            raise ValueError("No data returned from Gemini")
        return json.loads(text)

    async def generate_grounded(self, prompt: str) -> types.GenerateContentResponse:
        """Generate free text with Google Search grounding enabled.

        Grounded calls cannot use a response schema; sources are read from
        the candidate's grounding metadata by the caller.
        """
        config = types.GenerateContentConfig(
            tools=[types.Tool(google_search=types.GoogleSearch())],
        )
        return await self.generate_content(prompt, config)
