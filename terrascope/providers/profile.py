from __future__ import annotations

import logging
from typing import Any, Dict

from pydantic import ValidationError

from ..models import CountryProfile
from ..services.gemini_client import GeminiClient
from ..utils.errors import ProfileFetchError
from .base import BaseProvider

logger = logging.getLogger(__name__)

_STRING: Dict[str, Any] = {"type": "STRING"}
_NUMBER: Dict[str, Any] = {"type": "NUMBER"}
_STRING_LIST: Dict[str, Any] = {"type": "ARRAY", "items": _STRING}


def _coordinates(description: str) -> Dict[str, Any]:
    return {
        "type": "OBJECT",
        "description": description,
        "properties": {"latitude": _NUMBER, "longitude": _NUMBER},
        "required": ["latitude", "longitude"],
    }


PROFILE_SCHEMA: Dict[str, Any] = {
    "type": "OBJECT",
    "properties": {
        "name": {"type": "STRING", "description": "Common name of the country"},
        "officialName": {"type": "STRING", "description": "Official full name"},
        "isoAlpha2": {
            "type": "STRING",
            "description": "ISO 3166-1 alpha-2 two-letter country code (e.g., US, JP, BR)",
        },
        "capital": _STRING,
        "population": {"type": "STRING", "description": "Formatted population string (e.g. '67 Million')"},
        "currency": {
            "type": "OBJECT",
            "properties": {
                "name": {"type": "STRING", "description": "Currency name (e.g. United States Dollar)"},
                "code": {"type": "STRING", "description": "ISO 4217 code (e.g. USD)"},
                "symbol": {"type": "STRING", "description": "Currency symbol (e.g. $)"},
            },
        },
        "languages": _STRING_LIST,
        "region": _STRING,
        "description": {"type": "STRING", "description": "A concise 2-3 sentence overview."},
        "funFacts": _STRING_LIST,
        "economicHistory": {
            "type": "ARRAY",
            "description": "Last 5 years of economic data",
            "items": {
                "type": "OBJECT",
                "properties": {
                    "year": _STRING,
                    "gdp": {"type": "NUMBER", "description": "GDP Growth rate in percentage"},
                    "inflation": {"type": "NUMBER", "description": "Inflation rate in percentage"},
                },
            },
        },
        "landmarks": {
            "type": "ARRAY",
            "items": {
                "type": "OBJECT",
                "properties": {
                    "name": _STRING,
                    "description": _STRING,
                    "type": {"type": "STRING", "description": "Nature, Historical, Urban, etc."},
                    "emoji": {"type": "STRING", "description": "A single emoji icon representing this landmark"},
                    "url": {"type": "STRING", "description": "URL to official site or reputable info page"},
                },
            },
        },
        "climate": _STRING,
        "internetTLD": _STRING,
        "callingCode": _STRING,
        "timezones": {
            "type": "ARRAY",
            "items": _STRING,
            "description": "List of timezones (e.g. UTC+09:00)",
        },
        "coordinates": _coordinates("Geographic center of the country"),
        "capitalCoordinates": _coordinates("Geographic coordinates of the capital city"),
        "emergencyNumbers": {
            "type": "OBJECT",
            "properties": {
                "police": {"type": "STRING", "description": "Police emergency number"},
                "ambulance": {"type": "STRING", "description": "Ambulance emergency number"},
                "fire": {"type": "STRING", "description": "Fire department emergency number"},
            },
        },
        "safetyAdvisory": {
            "type": "OBJECT",
            "properties": {
                "score": {"type": "NUMBER", "description": "Safety risk score from 0 (Safe) to 5 (Extreme)"},
                "message": {"type": "STRING", "description": "Brief travel advisory summary"},
                "regionsToAvoid": {
                    "type": "ARRAY",
                    "items": _STRING,
                    "description": "Specific regions to avoid or exercise caution",
                },
                "healthRisks": {
                    "type": "ARRAY",
                    "items": _STRING,
                    "description": "Health risks or required vaccinations",
                },
                "visaInfo": {"type": "STRING", "description": "General visa requirement summary"},
            },
            "required": ["score", "message", "regionsToAvoid", "healthRisks", "visaInfo"],
        },
    },
    "required": [
        "name",
        "isoAlpha2",
        "capital",
        "population",
        "currency",
        "description",
        "economicHistory",
        "landmarks",
        "coordinates",
        "capitalCoordinates",
        "timezones",
        "emergencyNumbers",
        "safetyAdvisory",
    ],
}


def build_profile_prompt(country_name: str, language: str) -> str:
    return f"""Generate a comprehensive data profile for the country: {country_name}.
Ensure the economic data includes estimated GDP growth trends for the last 5 years, in chronological order.
Provide realistic data based on your knowledge base.

IMPORTANT: Provide all text content (descriptions, fun facts, landmark descriptions, safety messages, climate info, etc.) in {language}.

IMPORTANT: Provide precise latitude and longitude coordinates for both the country's center and its capital city.
IMPORTANT: Provide the ISO 3166-1 alpha-2 two-letter country code.
IMPORTANT: Include a relevant emoji for each landmark.
IMPORTANT: Provide a valid URL for an official website, Wikipedia page, or reputable travel guide for each landmark.
IMPORTANT: Provide detailed currency information including the symbol (e.g., $, €, £) and ISO code.
IMPORTANT: Provide a list of timezones covering the country (e.g., "UTC-05:00", "UTC+01:00").
IMPORTANT: Provide local emergency phone numbers for Police, Ambulance, and Fire.
IMPORTANT: Provide a current safety risk score (0.0 to 5.0, where 0 is safe and 5 is extreme danger).
IMPORTANT: Provide a brief travel advisory summary based on general geopolitical knowledge.
IMPORTANT: Provide a list of specific regions to avoid or exercise caution in (if any).
IMPORTANT: Provide a list of common health risks or recommended vaccinations.
IMPORTANT: Provide a brief summary of general visa requirements for tourists."""


class ProfileProvider(BaseProvider):
    """Generates a ``CountryProfile`` with Gemini structured output.

    This is the one adapter whose failure aborts the whole search, so every
    failure surfaces as ``ProfileFetchError`` instead of ``None``.
    """

    @property
    def provider_name(self) -> str:
        return "Gemini profile"

    def __init__(self, gemini: GeminiClient) -> None:
        super().__init__(timeout=gemini.timeout)
        self.gemini = gemini

    async def fetch_profile(self, country_name: str, language: str = "English") -> CountryProfile:
        query = (country_name or "").strip()
        if not query:
            raise ProfileFetchError("Country name is required", provider=self.provider_name)

        try:
            payload = await self.gemini.generate_json(build_profile_prompt(query, language), PROFILE_SCHEMA)
        except Exception as exc:
            raise ProfileFetchError(
                f"Profile generation failed for {query!r}: {type(exc).__name__}: {exc}",
                provider=self.provider_name,
            ) from exc

        try:
            profile = CountryProfile.model_validate(payload)
        except ValidationError as exc:
            raise ProfileFetchError(
                f"Generated profile for {query!r} failed validation: {exc.error_count()} error(s)",
                provider=self.provider_name,
            ) from exc

        logger.info("Fetched profile for %r -> %s (%s)", query, profile.name, profile.isoAlpha2)
        return profile
