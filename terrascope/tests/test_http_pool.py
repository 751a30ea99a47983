from __future__ import annotations

import asyncio

import pytest

from terrascope import __version__
from terrascope.services.http_pool import close_http_pool, get_http_client


def _in_fresh_loop(coro):
    loop = asyncio.new_event_loop()
    try:
        asyncio.set_event_loop(loop)
        return loop.run_until_complete(coro)
    finally:
        asyncio.set_event_loop(None)
        loop.close()


@pytest.fixture(autouse=True)
def empty_pool():
    _in_fresh_loop(close_http_pool())
    yield
    _in_fresh_loop(close_http_pool())


async def _client():
    return get_http_client()


def test_same_loop_shares_one_client() -> None:
    async def _twice():
        return get_http_client(), get_http_client()

    first, second = _in_fresh_loop(_twice())
    assert first is second


def test_each_loop_gets_its_own_client() -> None:
    assert _in_fresh_loop(_client()) is not _in_fresh_loop(_client())


def test_client_identifies_itself() -> None:
    client = _in_fresh_loop(_client())

    assert client.headers["User-Agent"] == f"terrascope/{__version__}"
    assert client.headers["Accept"] == "application/json"


def test_client_outside_loop_is_reused() -> None:
    first = get_http_client()
    second = get_http_client()

    assert first is second


def test_close_shuts_clients_and_next_call_reopens() -> None:
    outside = get_http_client()

    async def _close_and_reopen():
        inside = get_http_client()
        await close_http_pool()
        return inside, get_http_client()

    closed, reopened = _in_fresh_loop(_close_and_reopen())

    assert closed.is_closed
    assert outside.is_closed
    assert not reopened.is_closed
    assert reopened is not closed
