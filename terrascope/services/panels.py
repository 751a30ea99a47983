"""
Isolated display slots fed from fields of the active profile.

Weather, news, exchange rates and the live advisory each load into their
own ``PanelSlot``. A slot only accepts a result if the profile it was issued
for is still the active one, and a failing slot never affects the others
or the profile itself.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import Awaitable, Callable, Dict, Generic, Optional, TypeVar

from ..models import CountryProfile, FetchStatus, NewsResult, TravelAdvisory, WeatherData
from ..providers.exchangerate import ExchangeRateProvider
from ..providers.news import NewsProvider
from ..providers.travel_advisory import TravelAdvisoryProvider
from ..providers.weather import WeatherProvider
from .presentation import display_rates

logger = logging.getLogger(__name__)

T = TypeVar("T")

IsCurrent = Callable[[CountryProfile], bool]


@dataclass
class PanelSlot(Generic[T]):
    name: str
    status: FetchStatus = FetchStatus.IDLE
    data: Optional[T] = None
    iso_alpha2: Optional[str] = None

    @property
    def available(self) -> bool:
        return self.status == FetchStatus.SUCCESS and self.data is not None

    def reset(self) -> None:
        self.status = FetchStatus.IDLE
        self.data = None
        self.iso_alpha2 = None


class DashboardPanels:
    def __init__(
        self,
        weather: Optional[WeatherProvider] = None,
        news: Optional[NewsProvider] = None,
        exchange: Optional[ExchangeRateProvider] = None,
        advisory: Optional[TravelAdvisoryProvider] = None,
    ) -> None:
        self.weather_provider = weather
        self.news_provider = news
        self.exchange_provider = exchange
        self.advisory_provider = advisory

        self.weather: PanelSlot[WeatherData] = PanelSlot("weather")
        self.news: PanelSlot[NewsResult] = PanelSlot("news")
        self.exchange: PanelSlot[Dict[str, float]] = PanelSlot("exchange")
        self.advisory: PanelSlot[TravelAdvisory] = PanelSlot("advisory")

    def slots(self) -> Dict[str, PanelSlot]:
        return {slot.name: slot for slot in (self.weather, self.news, self.exchange, self.advisory)}

    def reset(self) -> None:
        for slot in self.slots().values():
            slot.reset()

    async def refresh(self, profile: CountryProfile, language: str, is_current: IsCurrent) -> None:
        """Load every configured panel for ``profile``; completion order is irrelevant."""
        tasks = []
        if self.weather_provider is not None:
            coords = profile.capitalCoordinates
            tasks.append(
                self._load(
                    self.weather,
                    profile,
                    is_current,
                    lambda: self.weather_provider.get_current_weather(coords.latitude, coords.longitude),
                )
            )
        if self.news_provider is not None:
            tasks.append(
                self._load(self.news, profile, is_current, lambda: self.news_provider.fetch_news(profile.name, language))
            )
        if self.exchange_provider is not None and profile.currency.code:
            tasks.append(self._load(self.exchange, profile, is_current, lambda: self._exchange_view(profile)))
        if self.advisory_provider is not None:
            tasks.append(
                self._load(self.advisory, profile, is_current, lambda: self.advisory_provider.get_advisory(profile.isoAlpha2))
            )
        await asyncio.gather(*tasks)

    async def _exchange_view(self, profile: CountryProfile) -> Optional[Dict[str, float]]:
        rates = await self.exchange_provider.get_rates(profile.currency.code)
        if rates is None:
            return None
        return display_rates(rates, profile.currency.code)

    async def _load(
        self,
        slot: PanelSlot[T],
        profile: CountryProfile,
        is_current: IsCurrent,
        fetch: Callable[[], Awaitable[Optional[T]]],
    ) -> None:
        slot.status = FetchStatus.LOADING
        slot.data = None
        slot.iso_alpha2 = profile.isoAlpha2

        try:
            data = await fetch()
        except Exception as exc:
            logger.warning("%s panel failed for %s: %s: %s", slot.name, profile.isoAlpha2, type(exc).__name__, exc)
            data = None

        if not is_current(profile):
            logger.debug("Discarding stale %s panel result for %s", slot.name, profile.isoAlpha2)
            return

        slot.data = data
        slot.status = FetchStatus.SUCCESS if data is not None else FetchStatus.ERROR
