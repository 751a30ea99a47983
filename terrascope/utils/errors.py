"""Error types raised across provider boundaries."""

from __future__ import annotations


class ProviderError(Exception):
    """Base class for failures reported by a provider adapter."""

    def __init__(self, message: str, provider: str = "") -> None:
        super().__init__(message)
        self.provider = provider


class ProfileFetchError(ProviderError):
    """The country profile could not be produced; aborts the search."""


class TranslationError(ProviderError):
    """Description/fun-fact translation failed."""
