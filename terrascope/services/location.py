from __future__ import annotations

import logging
from typing import List, Optional, Tuple

import httpx

logger = logging.getLogger(__name__)


class DeepLink:
    """Addressable location carrying a single ``country`` query parameter.

    Models a browser address bar plus its history stack: every change to
    the parameter pushes a new entry, and pushing the URL that is already
    current is a no-op.
    """

    PARAM = "country"

    def __init__(self, url: str) -> None:
        self._history: List[httpx.URL] = [httpx.URL(url)]

    @property
    def current(self) -> httpx.URL:
        return self._history[-1]

    @property
    def history(self) -> Tuple[str, ...]:
        return tuple(str(url) for url in self._history)

    def get_country(self) -> Optional[str]:
        value = self.current.params.get(self.PARAM)
        if value is None:
            return None
        return value.strip() or None

    def share_url(self, country_name: str) -> str:
        return str(self.current.copy_set_param(self.PARAM, country_name))

    def push_country(self, country_name: str) -> None:
        self._push(self.current.copy_set_param(self.PARAM, country_name))

    def clear_country(self) -> None:
        self._push(self.current.copy_remove_param(self.PARAM))

    def _push(self, url: httpx.URL) -> None:
        if url == self.current:
            return
        self._history.append(url)
        logger.debug("Location updated: %s", url)
