from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Any, Mapping, Optional

import httpx

logger = logging.getLogger(__name__)


class BaseProvider(ABC):
    """Common shape for every external data adapter.

    HTTP adapters fold transport, status and decoding failures into ``None``
    through ``_get_json``; the caller sees either a normalized value or the
    absence of one. Gemini-backed adapters handle their own failure mode.
    """

    def __init__(self, timeout: float = 20.0) -> None:
        self.timeout = timeout

    @property
    @abstractmethod
    def provider_name(self) -> str:
        ...

    async def _get_json(
        self,
        client: httpx.AsyncClient,
        url: str,
        params: Optional[Mapping[str, Any]] = None,
    ) -> Optional[Any]:
        try:
            response = await client.get(url, params=params, timeout=self.timeout)
            response.raise_for_status()
            return response.json()
        except httpx.HTTPStatusError as exc:
            logger.warning(
                "%s request failed: HTTP %s for %s",
                self.provider_name,
                exc.response.status_code,
                url,
            )
        except httpx.TimeoutException:
            logger.warning("%s request timed out after %ss", self.provider_name, self.timeout)
        except (httpx.HTTPError, ValueError) as exc:
            # ValueError covers undecodable JSON bodies.
            logger.warning("%s request failed: %s: %s", self.provider_name, type(exc).__name__, exc)
        return None
