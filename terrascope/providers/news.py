from __future__ import annotations

import logging
from typing import Any, Dict, Iterable, List, Optional

from ..models import NewsResult, NewsSource
from ..services.gemini_client import GeminiClient
from .base import BaseProvider

logger = logging.getLogger(__name__)

NO_NEWS_PLACEHOLDER = "No news found."


def extract_sources(response: Any) -> List[NewsSource]:
    """Pull ``{title, uri}`` pairs out of the first candidate's grounding chunks.

    Chunks without a web entry, title or uri are skipped. Duplicate uris keep
    the first occurrence.
    """
    candidates = getattr(response, "candidates", None) or []
    if not candidates:
        return []
    metadata = getattr(candidates[0], "grounding_metadata", None)
    chunks: Iterable[Any] = getattr(metadata, "grounding_chunks", None) or []

    unique: Dict[str, NewsSource] = {}
    for chunk in chunks:
        web = getattr(chunk, "web", None)
        uri = getattr(web, "uri", None)
        title = getattr(web, "title", None)
        if not uri or not title or uri in unique:
            continue
        unique[uri] = NewsSource(title=title, uri=uri)
    return list(unique.values())


class NewsProvider(BaseProvider):
    """Headline digest via search-grounded Gemini generation."""

    @property
    def provider_name(self) -> str:
        return "Gemini news"

    def __init__(self, gemini: GeminiClient) -> None:
        super().__init__(timeout=gemini.timeout)
        self.gemini = gemini

    async def fetch_news(self, country_name: str, language: str = "English") -> Optional[NewsResult]:
        prompt = (
            f"What are the top 5 current news headlines for {country_name} today?\n"
            "Provide a concise bulleted list of headlines with a very brief one-sentence summary for each.\n"
            f"IMPORTANT: Provide the headlines and summaries in {language}.\n"
            "Do not include standard markdown links in the text, as sources will be extracted from metadata."
        )
        try:
            response = await self.gemini.generate_grounded(prompt)
        except Exception as exc:
            logger.warning("News fetch failed for %s: %s: %s", country_name, type(exc).__name__, exc)
            return None

        content = (getattr(response, "text", None) or "").strip() or NO_NEWS_PLACEHOLDER
        return NewsResult(content=content, sources=extract_sources(response))
