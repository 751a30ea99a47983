"""
Profile aggregator: owns the active ``CountryProfile`` and its fetch status.

Each ``load_profile`` call takes a generation token when it is issued. When
the provider resumes, the result is applied only if no newer load has been
issued in the meantime; otherwise it is dropped. A failed load keeps the
previously displayed profile.
"""

from __future__ import annotations

import logging
from typing import Callable, List, Optional, Protocol

from ..models import CountryProfile, FetchStatus
from ..utils.errors import ProfileFetchError

logger = logging.getLogger(__name__)

ProfileListener = Callable[[Optional[CountryProfile]], None]


class ProfileSource(Protocol):
    """Anything that can produce a profile; failures should raise ``ProfileFetchError``."""

    async def fetch_profile(self, country_name: str, language: str = ...) -> CountryProfile:
        ...


class ProfileAggregator:
    GENERIC_ERROR = "Failed to fetch country data. Please try again."

    def __init__(self, provider: ProfileSource) -> None:
        self.provider = provider
        self._status = FetchStatus.IDLE
        self._active_profile: Optional[CountryProfile] = None
        self._error_message: Optional[str] = None
        self._generation = 0
        self._listeners: List[ProfileListener] = []

    @property
    def status(self) -> FetchStatus:
        return self._status

    @property
    def active_profile(self) -> Optional[CountryProfile]:
        return self._active_profile

    @property
    def error_message(self) -> Optional[str]:
        return self._error_message

    @property
    def generation(self) -> int:
        return self._generation

    def on_profile_change(self, listener: ProfileListener) -> None:
        """Register a callback fired whenever the active profile is replaced."""
        self._listeners.append(listener)

    def _is_current(self, token: int) -> bool:
        return token == self._generation

    def _set_active(self, profile: Optional[CountryProfile]) -> None:
        self._active_profile = profile
        for listener in list(self._listeners):
            listener(profile)

    async def load_profile(self, query: str, language: str) -> Optional[CountryProfile]:
        """Fetch ``query`` and make it the active profile.

        Returns the profile when this call's result was applied, ``None``
        when it failed or was superseded by a newer call.
        """
        self._generation += 1
        token = self._generation
        self._status = FetchStatus.LOADING
        self._error_message = None

        try:
            profile = await self.provider.fetch_profile(query, language)
        except Exception as exc:
            if not self._is_current(token):
                logger.debug("Discarding stale profile failure for %r (request %s)", query, token)
                return None
            if isinstance(exc, ProfileFetchError):
                logger.error("Profile fetch failed for %r: %s", query, exc)
            else:
                logger.exception("Profile source raised unexpectedly for %r", query)
            self._status = FetchStatus.ERROR
            self._error_message = self.GENERIC_ERROR
            return None

        if not self._is_current(token):
            logger.debug(
                "Discarding stale profile %s for %r (request %s, latest %s)",
                profile.isoAlpha2,
                query,
                token,
                self._generation,
            )
            return None

        self._status = FetchStatus.SUCCESS
        self._set_active(profile)
        return profile

    def clear(self) -> None:
        """Drop the active profile and return to IDLE; in-flight loads become stale."""
        self._generation += 1
        self._status = FetchStatus.IDLE
        self._error_message = None
        self._set_active(None)
