"""
Shared HTTP client pool for the weather, exchange-rate and advisory adapters.

One ``httpx.AsyncClient`` is kept per running event loop so that adapters
reuse TCP connections across profile loads. A client created outside a
running loop (CLI start-up, synchronous tests) is tracked separately.
Per-request timeouts are passed by each provider; the pool timeout below
is only the upper bound.
"""

from __future__ import annotations

import asyncio
import logging
import weakref
from typing import Optional

import httpx

from .. import __version__

logger = logging.getLogger(__name__)


class HTTPClientPool:
    """Singleton holder of the loop-scoped ``httpx.AsyncClient`` instances."""

    _instance: Optional[HTTPClientPool] = None
    _loop_clients: weakref.WeakKeyDictionary[asyncio.AbstractEventLoop, httpx.AsyncClient] = weakref.WeakKeyDictionary()
    _sync_client: Optional[httpx.AsyncClient] = None
    _MAX_CONNECTIONS = 20
    _MAX_KEEPALIVE_CONNECTIONS = 10
    _KEEPALIVE_EXPIRY = 5.0
    _TOTAL_TIMEOUT = 30.0
    _CONNECT_TIMEOUT = 10.0
    _POOL_TIMEOUT = 5.0
    _USER_AGENT = f"terrascope/{__version__}"

    def __new__(cls) -> HTTPClientPool:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    @classmethod
    def _current_loop(cls) -> Optional[asyncio.AbstractEventLoop]:
        try:
            return asyncio.get_running_loop()
        except RuntimeError:
            return None

    @classmethod
    def _initialize_client(cls) -> httpx.AsyncClient:
        limits = httpx.Limits(
            max_connections=cls._MAX_CONNECTIONS,
            max_keepalive_connections=cls._MAX_KEEPALIVE_CONNECTIONS,
            keepalive_expiry=cls._KEEPALIVE_EXPIRY,
        )
        timeout = httpx.Timeout(
            timeout=cls._TOTAL_TIMEOUT,
            connect=cls._CONNECT_TIMEOUT,
            pool=cls._POOL_TIMEOUT,
        )
        client = httpx.AsyncClient(
            limits=limits,
            timeout=timeout,
            http2=True,
            follow_redirects=True,
            headers={"User-Agent": cls._USER_AGENT, "Accept": "application/json"},
        )
        logger.info(
            "HTTP client pool initialized: max_connections=%s, timeout=%ss",
            cls._MAX_CONNECTIONS,
            cls._TOTAL_TIMEOUT,
        )
        return client

    @classmethod
    def get_client(cls) -> httpx.AsyncClient:
        """Get the shared client scoped to the current event loop."""
        cls()
        loop = cls._current_loop()
        if loop is None:
            if cls._sync_client is None or cls._sync_client.is_closed:
                cls._sync_client = cls._initialize_client()
            return cls._sync_client

        client = cls._loop_clients.get(loop)
        if client is None or client.is_closed:
            client = cls._initialize_client()
            cls._loop_clients[loop] = client
        return client

    @classmethod
    async def close(cls) -> None:
        """Close every pooled client, whichever loop created it."""
        loop_clients = list(cls._loop_clients.values())
        sync_client = cls._sync_client
        if not loop_clients and sync_client is None:
            return

        cls._loop_clients = weakref.WeakKeyDictionary()
        cls._sync_client = None

        all_clients = [sync_client] if sync_client is not None else []
        all_clients.extend(loop_clients)

        closed_ids = set()
        for client in all_clients:
            if id(client) in closed_ids:
                continue
            closed_ids.add(id(client))
            try:
                await client.aclose()
            except Exception as exc:  # pragma: no cover - cleanup of a client bound to a dead loop
                logger.debug("Error closing HTTP client: %s", exc)
        logger.info("HTTP client pool closed")


def get_http_client() -> httpx.AsyncClient:
    """Shared client for provider adapters; do not close it per request."""
    return HTTPClientPool.get_client()


async def close_http_pool() -> None:
    """Close the HTTP client pool (called on application shutdown)."""
    await HTTPClientPool.close()
