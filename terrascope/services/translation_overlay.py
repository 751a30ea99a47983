"""
Language overlay for the active profile's description and fun facts.

The overlay never replaces profile data; it is a display substitution that
is dropped whenever the bound profile changes or the base language is
selected. Translation always starts from the profile's original text.
"""

from __future__ import annotations

import logging
from typing import List, Optional, Protocol

from ..models import CountryProfile, FetchStatus, TranslatedContent
from ..utils.errors import TranslationError

logger = logging.getLogger(__name__)


class Translator(Protocol):
    async def translate(self, description: str, fun_facts: List[str], target_language: str) -> TranslatedContent:
        ...


class TranslationOverlay:
    def __init__(self, translator: Translator) -> None:
        self.translator = translator
        self._profile: Optional[CountryProfile] = None
        self._content: Optional[TranslatedContent] = None
        self._language: Optional[str] = None
        self._status = FetchStatus.IDLE
        self._generation = 0

    @property
    def content(self) -> Optional[TranslatedContent]:
        return self._content

    @property
    def language(self) -> Optional[str]:
        """Language of the current overlay, ``None`` when showing native content."""
        return self._language

    @property
    def status(self) -> FetchStatus:
        return self._status

    @property
    def profile(self) -> Optional[CountryProfile]:
        return self._profile

    @property
    def description(self) -> Optional[str]:
        if self._content is not None:
            return self._content.description
        return self._profile.description if self._profile else None

    @property
    def fun_facts(self) -> List[str]:
        if self._content is not None:
            return list(self._content.funFacts)
        return list(self._profile.funFacts) if self._profile else []

    def invalidate(self) -> None:
        self._generation += 1
        self._content = None
        self._language = None
        self._status = FetchStatus.IDLE

    def bind(self, profile: Optional[CountryProfile]) -> None:
        self._profile = profile
        self.invalidate()

    async def translate(self, target_language: str, base_language: str) -> Optional[TranslatedContent]:
        if target_language == base_language:
            self.invalidate()
            return None

        profile = self._profile
        if profile is None:
            return None

        self._generation += 1
        token = self._generation
        self._status = FetchStatus.LOADING

        try:
            result = await self.translator.translate(profile.description, list(profile.funFacts), target_language)
        except TranslationError as exc:
            if token != self._generation:
                return None
            logger.warning("Translation of %s into %s failed: %s", profile.isoAlpha2, target_language, exc)
            self._status = FetchStatus.ERROR
            return None

        if token != self._generation or profile is not self._profile:
            logger.debug("Discarding stale %s translation for %s", target_language, profile.isoAlpha2)
            return None

        self._content = result
        self._language = target_language
        self._status = FetchStatus.SUCCESS
        return result
