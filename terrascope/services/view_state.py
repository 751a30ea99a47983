"""
View-state coordinator for the dashboard.

Ties search, comparison mode, content translation, panels, deep-linking and
the theme preference together. Presentation layers read ``snapshot()`` and
call the mutation methods below; they never write component state directly.

State machine: IDLE -> LOADING -> {SUCCESS, ERROR}; a new search from SUCCESS
or ERROR goes back to LOADING. Compare mode is an orthogonal flag that a new
single-country search always turns off.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Optional, Tuple

from ..config import Settings, get_settings
from ..models import CountryProfile, FetchStatus, TranslatedContent
from ..providers.exchangerate import ExchangeRateProvider
from ..providers.news import NewsProvider
from ..providers.profile import ProfileProvider
from ..providers.translation import TranslationProvider
from ..providers.travel_advisory import TravelAdvisoryProvider
from ..providers.weather import WeatherProvider
from .comparison import ComparisonSet
from .gemini_client import GeminiClient
from .location import DeepLink
from .panels import DashboardPanels
from .preferences import PreferenceStore
from .profile_aggregator import ProfileAggregator, ProfileSource
from .translation_overlay import TranslationOverlay, Translator

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ViewState:
    status: FetchStatus = FetchStatus.IDLE
    active_profile: Optional[CountryProfile] = None
    error_message: Optional[str] = None
    is_compare_mode: bool = False
    app_language: str = "English"
    selected_content_language: str = "English"
    translated_content: Optional[TranslatedContent] = None
    translation_status: FetchStatus = FetchStatus.IDLE
    theme: str = "dark"
    comparison: Tuple[CountryProfile, ...] = field(default_factory=tuple)

    @property
    def show_search(self) -> bool:
        return not self.is_compare_mode

    @property
    def show_error(self) -> bool:
        return self.status == FetchStatus.ERROR and not self.is_compare_mode

    @property
    def show_detail(self) -> bool:
        return not self.is_compare_mode and self.status == FetchStatus.SUCCESS and self.active_profile is not None


class ViewStateCoordinator:
    def __init__(
        self,
        profile_source: ProfileSource,
        translator: Translator,
        panels: Optional[DashboardPanels] = None,
        location: Optional[DeepLink] = None,
        preferences: Optional[PreferenceStore] = None,
        app_language: str = "English",
        default_theme: str = "dark",
    ) -> None:
        self.aggregator = ProfileAggregator(profile_source)
        self.comparison = ComparisonSet()
        self.overlay = TranslationOverlay(translator)
        self.panels = panels or DashboardPanels()
        self.location = location
        self.preferences = preferences

        self.app_language = app_language
        self.selected_content_language = app_language
        self.theme = preferences.load_theme() if preferences else default_theme

        self.aggregator.on_profile_change(self._on_profile_change)

    @classmethod
    def from_settings(cls, settings: Optional[Settings] = None, url: Optional[str] = None) -> "ViewStateCoordinator":
        """Wire the coordinator to the real Gemini and HTTP providers."""
        settings = settings or get_settings()
        gemini = GeminiClient(settings=settings)
        panels = DashboardPanels(
            weather=WeatherProvider(),
            news=NewsProvider(gemini),
            exchange=ExchangeRateProvider(),
            advisory=TravelAdvisoryProvider(),
        )
        return cls(
            profile_source=ProfileProvider(gemini),
            translator=TranslationProvider(gemini),
            panels=panels,
            location=DeepLink(url or settings.app_base_url),
            preferences=PreferenceStore(settings.preferences_path, settings.default_theme),
            app_language=settings.default_language,
            default_theme=settings.default_theme,
        )

    # -- Read side --

    @property
    def active_profile(self) -> Optional[CountryProfile]:
        return self.aggregator.active_profile

    def snapshot(self) -> ViewState:
        return ViewState(
            status=self.aggregator.status,
            active_profile=self.aggregator.active_profile,
            error_message=self.aggregator.error_message,
            is_compare_mode=self.comparison.is_compare_mode,
            app_language=self.app_language,
            selected_content_language=self.selected_content_language,
            translated_content=self.overlay.content,
            translation_status=self.overlay.status,
            theme=self.theme,
            comparison=self.comparison.entries,
        )

    def is_current(self, profile: CountryProfile) -> bool:
        return self.aggregator.active_profile is profile

    # -- Search and deep link --

    async def initialize(self, load_panels: bool = True) -> Optional[CountryProfile]:
        """Load the country named in the location, if any, without re-publishing it."""
        if self.location is None:
            return None
        country = self.location.get_country()
        if not country:
            return None
        logger.info("Deep link requests %r", country)
        return await self.search(country, publish=False, load_panels=load_panels)

    async def search(self, query: str, publish: bool = True, load_panels: bool = True) -> Optional[CountryProfile]:
        query = (query or "").strip()
        if not query:
            return None

        self.comparison.exit_compare_mode()
        self.overlay.invalidate()
        self.selected_content_language = self.app_language

        profile = await self.aggregator.load_profile(query, self.app_language)
        if profile is None:
            return None

        if publish:
            self._publish(profile.name)
        if load_panels:
            await self.panels.refresh(profile, self.app_language, self.is_current)
        return profile

    def reset(self) -> None:
        """Return to the empty start view and drop the country parameter."""
        self.comparison.exit_compare_mode()
        self.aggregator.clear()
        self.selected_content_language = self.app_language
        if self.location is not None:
            try:
                self.location.clear_country()
            except Exception as exc:
                logger.warning("History update failed: %s", exc)

    def share_url(self) -> Optional[str]:
        profile = self.aggregator.active_profile
        if profile is None or self.location is None:
            return None
        return self.location.share_url(profile.name)

    def _publish(self, country_name: str) -> None:
        if self.location is None:
            return
        try:
            self.location.push_country(country_name)
        except Exception as exc:
            logger.warning("Could not update location history: %s", exc)

    def _on_profile_change(self, profile: Optional[CountryProfile]) -> None:
        self.overlay.bind(profile)
        self.panels.reset()

    # -- Languages --

    def set_app_language(self, language: str) -> None:
        """Switch UI language; profile content keeps its language until the next search."""
        self.app_language = language

    async def translate_content(self, language: str) -> Optional[TranslatedContent]:
        if self.aggregator.active_profile is None:
            return None
        self.selected_content_language = language
        return await self.overlay.translate(language, self.app_language)

    # -- Comparison --

    def add_to_comparison(self) -> bool:
        profile = self.aggregator.active_profile
        if profile is None:
            return False
        return self.comparison.add(profile)

    def remove_from_comparison(self, iso_alpha2: str) -> bool:
        return self.comparison.remove(iso_alpha2)

    def clear_comparison(self) -> None:
        self.comparison.clear()

    def toggle_compare_mode(self) -> bool:
        return self.comparison.toggle_compare_mode()

    def close_comparison(self) -> None:
        self.comparison.exit_compare_mode()

    # -- Theme --

    def toggle_theme(self) -> str:
        self.theme = "light" if self.theme == "dark" else "dark"
        if self.preferences is not None:
            self.preferences.save_theme(self.theme)
        return self.theme
