from __future__ import annotations

import logging
from typing import List, Tuple

from ..models import CountryProfile

logger = logging.getLogger(__name__)


class ComparisonSet:
    """Ordered, de-duplicated, bounded set of profiles shown side by side.

    Entries are deep copies, so re-fetching a country later never changes an
    entry that was already added. ``isoAlpha2`` is the only identity used.
    """

    MAX_ENTRIES = 3

    def __init__(self) -> None:
        self._entries: List[CountryProfile] = []
        self._compare_mode = False

    def __len__(self) -> int:
        return len(self._entries)

    @property
    def entries(self) -> Tuple[CountryProfile, ...]:
        return tuple(self._entries)

    @property
    def is_compare_mode(self) -> bool:
        return self._compare_mode

    @property
    def is_full(self) -> bool:
        return len(self._entries) >= self.MAX_ENTRIES

    def contains(self, iso_alpha2: str) -> bool:
        code = (iso_alpha2 or "").upper()
        return any(entry.isoAlpha2 == code for entry in self._entries)

    def add(self, profile: CountryProfile) -> bool:
        if self.is_full:
            logger.debug("Comparison set full, ignoring %s", profile.isoAlpha2)
            return False
        if self.contains(profile.isoAlpha2):
            return False
        self._entries.append(profile.model_copy(deep=True))
        return True

    def remove(self, iso_alpha2: str) -> bool:
        code = (iso_alpha2 or "").upper()
        remaining = [entry for entry in self._entries if entry.isoAlpha2 != code]
        removed = len(remaining) != len(self._entries)
        self._entries = remaining
        if not self._entries:
            self._compare_mode = False
        return removed

    def clear(self) -> None:
        self._entries = []
        self._compare_mode = False

    def toggle_compare_mode(self) -> bool:
        if self._entries:
            self._compare_mode = not self._compare_mode
        return self._compare_mode

    def exit_compare_mode(self) -> None:
        self._compare_mode = False
