from __future__ import annotations

import logging
from typing import Optional

from pydantic import ValidationError

from ..config import get_settings
from ..models import TravelAdvisory
from ..services.http_pool import get_http_client
from .base import BaseProvider

logger = logging.getLogger(__name__)


class TravelAdvisoryProvider(BaseProvider):
    """Live advisory score from travel-advisory.info.

    Complements the generated ``safetyAdvisory`` block with a published
    score; the API keys its ``data`` object by upper-case ISO code.
    """

    @property
    def provider_name(self) -> str:
        return "Travel-Advisory.info"

    def __init__(self, base_url: Optional[str] = None, timeout: Optional[float] = None) -> None:
        settings = get_settings()
        super().__init__(timeout=timeout if timeout is not None else settings.provider_timeout)
        self.base_url = base_url or settings.travel_advisory_base_url

    async def get_advisory(self, iso_code: str) -> Optional[TravelAdvisory]:
        code = (iso_code or "").strip().upper()
        if len(code) != 2:
            return None

        payload = await self._get_json(get_http_client(), self.base_url, params={"countrycode": code})
        if not isinstance(payload, dict):
            return None

        data = payload.get("data")
        country_data = data.get(code) if isinstance(data, dict) else None
        if not isinstance(country_data, dict):
            return None

        advisory = country_data.get("advisory")
        if not isinstance(advisory, dict):
            logger.warning("No advisory block for %s", code)
            return None

        try:
            return TravelAdvisory(
                score=advisory.get("score"),
                message=advisory.get("message") or "",
                updated=advisory.get("updated") or "",
                isoAlpha2=country_data.get("iso_alpha2") or code,
            )
        except ValidationError as exc:
            logger.warning("Malformed advisory for %s: %s", code, exc)
            return None
