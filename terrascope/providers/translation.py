from __future__ import annotations

import json
import logging
from typing import Any, Dict, List

from pydantic import ValidationError

from ..models import TranslatedContent
from ..services.gemini_client import GeminiClient
from ..utils.errors import TranslationError
from .base import BaseProvider

logger = logging.getLogger(__name__)

TRANSLATION_SCHEMA: Dict[str, Any] = {
    "type": "OBJECT",
    "properties": {
        "description": {"type": "STRING"},
        "funFacts": {"type": "ARRAY", "items": {"type": "STRING"}},
    },
    "required": ["description", "funFacts"],
}


class TranslationProvider(BaseProvider):
    """Translates a profile's description and fun facts."""

    @property
    def provider_name(self) -> str:
        return "Gemini translation"

    def __init__(self, gemini: GeminiClient) -> None:
        super().__init__(timeout=gemini.timeout)
        self.gemini = gemini

    async def translate(self, description: str, fun_facts: List[str], target_language: str) -> TranslatedContent:
        prompt = (
            f"Translate the following country description and funFacts into {target_language}.\n\n"
            f"Description: {description}\n\n"
            f"Fun Facts:\n{json.dumps(fun_facts, ensure_ascii=False)}\n\n"
            "Return valid JSON."
        )
        try:
            payload = await self.gemini.generate_json(prompt, TRANSLATION_SCHEMA)
            return TranslatedContent.model_validate(payload)
        except (ValidationError, ValueError) as exc:
            raise TranslationError(
                f"Translation into {target_language} returned unusable content: {exc}",
                provider=self.provider_name,
            ) from exc
        except Exception as exc:
            raise TranslationError(
                f"Translation into {target_language} failed: {type(exc).__name__}: {exc}",
                provider=self.provider_name,
            ) from exc
