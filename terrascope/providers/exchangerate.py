from __future__ import annotations

import logging
from typing import Dict, Optional

from ..config import get_settings
from ..services.http_pool import get_http_client
from .base import BaseProvider

logger = logging.getLogger(__name__)


class ExchangeRateProvider(BaseProvider):
    """Spot rates from the open access ExchangeRate-API endpoint."""

    @property
    def provider_name(self) -> str:
        return "ExchangeRate-API"

    def __init__(self, base_url: Optional[str] = None, timeout: Optional[float] = None) -> None:
        settings = get_settings()
        super().__init__(timeout=timeout if timeout is not None else settings.provider_timeout)
        self.base_url = (base_url or settings.exchangerate_base_url).rstrip("/")

    async def get_rates(self, base_code: str) -> Optional[Dict[str, float]]:
        """Return ``{currency_code: rate}`` for one unit of ``base_code``."""
        code = (base_code or "").strip().upper()
        if not code:
            return None

        payload = await self._get_json(get_http_client(), f"{self.base_url}/{code}")
        if not isinstance(payload, dict):
            return None
        if payload.get("result") != "success":
            logger.warning(
                "ExchangeRate-API returned result=%r for %s (%s)",
                payload.get("result"),
                code,
                payload.get("error-type", "no error type"),
            )
            return None

        rates = payload.get("rates")
        if not isinstance(rates, dict) or not rates:
            return None

        normalized: Dict[str, float] = {}
        for target, rate in rates.items():
            try:
                normalized[str(target).upper()] = float(rate)
            except (TypeError, ValueError):
                logger.debug("Skipping non-numeric rate %s=%r", target, rate)
        return normalized or None
