from __future__ import annotations

import asyncio
import unittest

import pytest

from terrascope.models import FetchStatus
from terrascope.services.profile_aggregator import ProfileAggregator
from terrascope.tests.utils import DeferredProfileSource, StaticProfileSource, make_profile, run, settle


class ProfileAggregatorTests(unittest.TestCase):
    def test_starts_idle(self) -> None:
        aggregator = ProfileAggregator(StaticProfileSource({}))

        self.assertEqual(aggregator.status, FetchStatus.IDLE)
        self.assertIsNone(aggregator.active_profile)
        self.assertIsNone(aggregator.error_message)

    def test_successful_load_sets_active_profile(self) -> None:
        japan = make_profile()
        source = StaticProfileSource({"japan": japan})
        aggregator = ProfileAggregator(source)
        seen = []
        aggregator.on_profile_change(seen.append)

        result = run(aggregator.load_profile("Japan", "German"))

        self.assertIs(result, japan)
        self.assertIs(aggregator.active_profile, japan)
        self.assertEqual(aggregator.status, FetchStatus.SUCCESS)
        self.assertEqual(source.calls, [("Japan", "German")])
        self.assertEqual(seen, [japan])

    def test_failure_keeps_previous_profile(self) -> None:
        japan = make_profile()
        aggregator = ProfileAggregator(StaticProfileSource({"japan": japan}))

        async def scenario():
            await aggregator.load_profile("Japan", "English")
            return await aggregator.load_profile("Atlantis", "English")

        self.assertIsNone(run(scenario()))
        self.assertEqual(aggregator.status, FetchStatus.ERROR)
        self.assertEqual(aggregator.error_message, ProfileAggregator.GENERIC_ERROR)
        self.assertIs(aggregator.active_profile, japan)

    def test_new_load_clears_error_message(self) -> None:
        japan = make_profile()
        aggregator = ProfileAggregator(StaticProfileSource({"japan": japan}))

        async def scenario():
            await aggregator.load_profile("Atlantis", "English")
            self.assertEqual(aggregator.status, FetchStatus.ERROR)
            await aggregator.load_profile("Japan", "English")

        run(scenario())
        self.assertEqual(aggregator.status, FetchStatus.SUCCESS)
        self.assertIsNone(aggregator.error_message)

    def test_unexpected_source_error_is_reported_as_failure(self) -> None:
        japan = make_profile()
        source = StaticProfileSource({"japan": japan})
        aggregator = ProfileAggregator(source)
        run(aggregator.load_profile("Japan", "English"))

        async def broken(country_name, language="English"):
            raise KeyError("isoAlpha2")

        source.fetch_profile = broken
        result = run(aggregator.load_profile("France", "English"))

        self.assertIsNone(result)
        self.assertEqual(aggregator.status, FetchStatus.ERROR)
        self.assertEqual(aggregator.error_message, ProfileAggregator.GENERIC_ERROR)
        self.assertIs(aggregator.active_profile, japan)

    def test_clear_returns_to_idle(self) -> None:
        aggregator = ProfileAggregator(StaticProfileSource({"japan": make_profile()}))
        seen = []
        aggregator.on_profile_change(seen.append)

        run(aggregator.load_profile("Japan", "English"))
        aggregator.clear()

        self.assertEqual(aggregator.status, FetchStatus.IDLE)
        self.assertIsNone(aggregator.active_profile)
        self.assertEqual(seen[-1], None)


@pytest.mark.asyncio
async def test_out_of_order_completion_keeps_latest_request():
    source = DeferredProfileSource()
    aggregator = ProfileAggregator(source)
    france = make_profile("France", "FR", "EUR")
    germany = make_profile("Germany", "DE", "EUR")

    first = asyncio.create_task(aggregator.load_profile("France", "English"))
    await settle()
    second = asyncio.create_task(aggregator.load_profile("Germany", "English"))
    await settle()

    source.resolve("Germany", germany)
    await settle()
    assert aggregator.active_profile is germany
    assert aggregator.status == FetchStatus.SUCCESS

    source.resolve("France", france)
    assert await first is None
    assert await second is germany
    assert aggregator.active_profile is germany
    assert aggregator.status == FetchStatus.SUCCESS


@pytest.mark.asyncio
async def test_stale_failure_does_not_overwrite_newer_success():
    source = DeferredProfileSource()
    aggregator = ProfileAggregator(source)
    germany = make_profile("Germany", "DE", "EUR")

    first = asyncio.create_task(aggregator.load_profile("France", "English"))
    await settle()
    second = asyncio.create_task(aggregator.load_profile("Germany", "English"))
    await settle()

    source.resolve("Germany", germany)
    await second
    source.fail("France")
    await first

    assert aggregator.status == FetchStatus.SUCCESS
    assert aggregator.error_message is None
    assert aggregator.active_profile is germany


@pytest.mark.asyncio
async def test_clear_discards_in_flight_load():
    source = DeferredProfileSource()
    aggregator = ProfileAggregator(source)

    pending = asyncio.create_task(aggregator.load_profile("Japan", "English"))
    await settle()
    assert aggregator.status == FetchStatus.LOADING

    aggregator.clear()
    source.resolve("Japan", make_profile())

    assert await pending is None
    assert aggregator.active_profile is None
    assert aggregator.status == FetchStatus.IDLE
