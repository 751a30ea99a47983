from __future__ import annotations

import logging
from typing import Optional

from pydantic import ValidationError

from ..config import get_settings
from ..models import WeatherData
from ..services.http_pool import get_http_client
from .base import BaseProvider

logger = logging.getLogger(__name__)

CURRENT_FIELDS = (
    "temperature_2m",
    "relative_humidity_2m",
    "apparent_temperature",
    "is_day",
    "weather_code",
    "wind_speed_10m",
    "wind_direction_10m",
)


class WeatherProvider(BaseProvider):
    """Current conditions from Open-Meteo (no API key)."""

    @property
    def provider_name(self) -> str:
        return "Open-Meteo"

    def __init__(self, base_url: Optional[str] = None, timeout: Optional[float] = None) -> None:
        settings = get_settings()
        super().__init__(timeout=timeout if timeout is not None else settings.provider_timeout)
        self.base_url = base_url or settings.weather_base_url

    async def get_current_weather(self, latitude: float, longitude: float) -> Optional[WeatherData]:
        params = {
            "latitude": str(latitude),
            "longitude": str(longitude),
            "current": ",".join(CURRENT_FIELDS),
            "wind_speed_unit": "kmh",
        }
        payload = await self._get_json(get_http_client(), self.base_url, params=params)
        if not isinstance(payload, dict):
            return None

        current = payload.get("current")
        if not isinstance(current, dict):
            logger.warning("Open-Meteo response has no 'current' block for %s,%s", latitude, longitude)
            return None

        try:
            return WeatherData(
                temperature=current["temperature_2m"],
                feelsLike=current["apparent_temperature"],
                humidity=current["relative_humidity_2m"],
                windSpeed=current["wind_speed_10m"],
                windDirection=current["wind_direction_10m"],
                weatherCode=current["weather_code"],
                isDay=current.get("is_day") == 1,
            )
        except (KeyError, ValidationError) as exc:
            logger.warning("Malformed Open-Meteo payload: %s", exc)
            return None
