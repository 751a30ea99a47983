from __future__ import annotations

import asyncio
import copy
from types import SimpleNamespace
from typing import Any, Dict, Iterable, List, Optional

import httpx

from terrascope.models import CountryProfile, TranslatedContent
from terrascope.utils.errors import ProfileFetchError, TranslationError


def run(coro):
    return asyncio.run(coro)


class MockAsyncResponse:
    def __init__(self, payload: Any, status_code: int = 200, headers: Optional[Dict[str, str]] = None) -> None:
        self._payload = payload
        self.status_code = status_code
        self.headers = headers or {}

    def json(self) -> Any:
        if isinstance(self._payload, Exception):
            raise self._payload
        return self._payload

    def raise_for_status(self) -> None:
        if self.status_code >= 400:
            request = httpx.Request("GET", "https://example.test")
            response = httpx.Response(self.status_code, request=request)
            raise httpx.HTTPStatusError(f"HTTP {self.status_code}", request=request, response=response)


class MockAsyncClient:
    """Returns queued responses in order; an exception in the queue is raised."""

    def __init__(self, responses: Iterable[Any]) -> None:
        self._responses = list(responses)
        self.calls: List[Dict[str, Any]] = []

    async def get(self, url: str, params: Optional[Dict[str, Any]] = None, timeout: Optional[float] = None):
        self.calls.append({"url": url, "params": params, "timeout": timeout})
        if not self._responses:
            raise AssertionError(f"Unexpected request to {url}")
        response = self._responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response


class FakeGemini:
    """Stands in for ``GeminiClient``; records prompts and replays queued results."""

    def __init__(self, json_results: Iterable[Any] = (), grounded_results: Iterable[Any] = (), timeout: float = 5.0) -> None:
        self._json_results = list(json_results)
        self._grounded_results = list(grounded_results)
        self.timeout = timeout
        self.prompts: List[str] = []
        self.schemas: List[Dict[str, Any]] = []

    @staticmethod
    def _next(queue: List[Any]) -> Any:
        result = queue.pop(0)
        if isinstance(result, Exception):
            raise result
        return result

    async def generate_json(self, prompt: str, response_schema: Dict[str, Any]) -> Any:
        self.prompts.append(prompt)
        self.schemas.append(response_schema)
        return self._next(self._json_results)

    async def generate_grounded(self, prompt: str) -> Any:
        self.prompts.append(prompt)
        return self._next(self._grounded_results)


def grounded_response(text: Optional[str], sources: Iterable[tuple] = ()) -> SimpleNamespace:
    chunks = [SimpleNamespace(web=SimpleNamespace(title=title, uri=uri) if uri or title else None) for title, uri in sources]
    candidate = SimpleNamespace(grounding_metadata=SimpleNamespace(grounding_chunks=chunks))
    return SimpleNamespace(text=text, candidates=[candidate])


_BASE_PROFILE: Dict[str, Any] = {
    "name": "Japan",
    "officialName": "State of Japan",
    "isoAlpha2": "JP",
    "capital": "Tokyo",
    "population": "125 Million",
    "currency": {"name": "Japanese Yen", "code": "JPY", "symbol": "¥"},
    "languages": ["Japanese"],
    "region": "East Asia",
    "description": "An island country in East Asia.",
    "funFacts": ["Japan has over 6,800 islands.", "Vending machines are everywhere."],
    "economicHistory": [
        {"year": "2019", "gdp": -0.4, "inflation": 0.5},
        {"year": "2020", "gdp": -4.1, "inflation": 0.0},
        {"year": "2021", "gdp": 2.6, "inflation": -0.2},
        {"year": "2022", "gdp": 1.0, "inflation": 2.5},
        {"year": "2023", "gdp": 1.9, "inflation": 3.2},
    ],
    "landmarks": [
        {
            "name": "Mount Fuji",
            "description": "Iconic volcano.",
            "type": "Nature",
            "emoji": "🗻",
            "url": "https://en.wikipedia.org/wiki/Mount_Fuji",
        }
    ],
    "climate": "Temperate",
    "internetTLD": ".jp",
    "callingCode": "+81",
    "timezones": ["UTC+09:00"],
    "coordinates": {"latitude": 36.2, "longitude": 138.25},
    "capitalCoordinates": {"latitude": 35.68, "longitude": 139.69},
    "emergencyNumbers": {"police": "110", "ambulance": "119", "fire": "119"},
    "safetyAdvisory": {
        "score": 1.3,
        "message": "Exercise normal precautions.",
        "regionsToAvoid": [],
        "healthRisks": ["Japanese encephalitis in rural areas"],
        "visaInfo": "Visa-free for many nationalities up to 90 days.",
    },
}


def profile_payload(**overrides: Any) -> Dict[str, Any]:
    payload = copy.deepcopy(_BASE_PROFILE)
    payload.update(overrides)
    return payload


def make_profile(name: str = "Japan", iso: str = "JP", currency_code: str = "JPY", **overrides: Any) -> CountryProfile:
    currency = {"name": f"{name} currency", "code": currency_code, "symbol": "$"}
    return CountryProfile.model_validate(
        profile_payload(name=name, isoAlpha2=iso, currency=currency, **overrides)
    )


class StaticProfileSource:
    """Profile source keyed by lower-cased query; unknown queries fail."""

    def __init__(self, profiles: Dict[str, CountryProfile]) -> None:
        self.profiles = {key.lower(): value for key, value in profiles.items()}
        self.calls: List[tuple] = []

    async def fetch_profile(self, country_name: str, language: str = "English") -> CountryProfile:
        self.calls.append((country_name, language))
        await asyncio.sleep(0)
        profile = self.profiles.get(country_name.lower())
        if profile is None:
            raise ProfileFetchError(f"No profile for {country_name}")
        return profile


class DeferredProfileSource:
    """Each call blocks until the test resolves it, so completion order is controlled."""

    def __init__(self) -> None:
        self.pending: Dict[str, asyncio.Future] = {}
        self.calls: List[tuple] = []

    async def fetch_profile(self, country_name: str, language: str = "English") -> CountryProfile:
        self.calls.append((country_name, language))
        future = asyncio.get_running_loop().create_future()
        self.pending[country_name] = future
        return await future

    def resolve(self, country_name: str, profile: CountryProfile) -> None:
        self.pending[country_name].set_result(profile)

    def fail(self, country_name: str, message: str = "boom") -> None:
        self.pending[country_name].set_exception(ProfileFetchError(message))


class DeferredTranslator:
    def __init__(self) -> None:
        self.pending: List[asyncio.Future] = []
        self.calls: List[tuple] = []

    async def translate(self, description: str, fun_facts: List[str], target_language: str) -> TranslatedContent:
        self.calls.append((description, list(fun_facts), target_language))
        future = asyncio.get_running_loop().create_future()
        self.pending.append(future)
        return await future

    def resolve(self, index: int, description: str, fun_facts: Optional[List[str]] = None) -> None:
        self.pending[index].set_result(TranslatedContent(description=description, funFacts=fun_facts or []))

    def fail(self, index: int) -> None:
        self.pending[index].set_exception(TranslationError("translation backend down"))


async def settle() -> None:
    """Let every ready task run to its next suspension point."""
    for _ in range(5):
        await asyncio.sleep(0)


class EchoTranslator:
    """Immediate translator that tags text with the target language; ``Klingon`` fails."""

    def __init__(self) -> None:
        self.calls: List[tuple] = []

    async def translate(self, description: str, fun_facts: List[str], target_language: str) -> TranslatedContent:
        self.calls.append((description, target_language))
        if target_language == "Klingon":
            raise TranslationError("unsupported language")
        return TranslatedContent(
            description=f"[{target_language}] {description}",
            funFacts=[f"[{target_language}] {fact}" for fact in fun_facts],
        )
