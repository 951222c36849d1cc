"""Tests for the fetch-once catalog cache."""

import asyncio

import pytest

from tardisremote.core import CatalogCache
from tardisremote.exceptions import DecodeFailed, RemoteFetchFailed
from tardisremote.models import CatalogKind
from tardisremote.protocols import CatalogEvent


@pytest.mark.unit
@pytest.mark.asyncio
class TestCatalogFetch:
    """Test fetching and the fetch-once guard."""

    async def test_fetch_populates_in_device_order(self, fake_api, sounds):
        """Test a successful fetch."""
        cache = CatalogCache(fake_api)

        result = await cache.fetch_sounds()

        assert result == tuple(sounds)
        assert cache.sounds == tuple(sounds)
        assert cache.is_loaded(CatalogKind.SOUNDS)

    async def test_second_fetch_makes_no_remote_call(self, fake_api):
        """fetch_sounds() twice issues a single list call."""
        cache = CatalogCache(fake_api)

        await cache.fetch_sounds()
        await cache.fetch_sounds()

        assert len(fake_api.calls_to("list_sounds")) == 1

    async def test_concurrent_fetches_share_one_call(self, make_api, sounds):
        """Racing fetches join the in-flight request."""
        api = make_api(delay=0.05)
        cache = CatalogCache(api)

        results = await asyncio.gather(*(cache.fetch_sounds() for _ in range(5)))

        assert len(api.calls_to("list_sounds")) == 1
        assert all(r == tuple(sounds) for r in results)

    async def test_kinds_are_independent(self, fake_api, sections, scenes):
        """Fetching one collection does not fetch the others."""
        cache = CatalogCache(fake_api)

        await cache.fetch_scenes()

        assert cache.scenes == tuple(scenes)
        assert cache.sections == ()
        assert fake_api.calls_to("list_sections") == []

    async def test_fetch_all(self, fake_api, sections, sounds, scenes):
        """Test fetching every collection at once."""
        cache = CatalogCache(fake_api)

        await cache.fetch_all()

        assert cache.sections == tuple(sections)
        assert cache.sounds == tuple(sounds)
        assert cache.scenes == tuple(scenes)

    async def test_empty_result_is_refetched(self, make_api):
        """An empty list is valid, and the guard only blocks non-empty collections."""
        api = make_api(scenes=[])
        cache = CatalogCache(api)

        assert await cache.fetch_scenes() == ()
        assert await cache.fetch_scenes() == ()

        assert len(api.calls_to("list_scenes")) == 2


@pytest.mark.unit
@pytest.mark.asyncio
class TestCatalogFailures:
    """Test that failures are reported, never raised."""

    async def test_failure_leaves_collection_empty(self, fake_api, observer):
        """A failed fetch is swallowed and broadcast."""
        fake_api.fail("list_sounds")
        cache = CatalogCache(fake_api)
        cache.register_observer(observer)

        result = await cache.fetch_sounds()

        assert result == ()
        assert not cache.is_loaded(CatalogKind.SOUNDS)
        assert isinstance(cache.last_error(CatalogKind.SOUNDS), RemoteFetchFailed)
        assert observer.catalog_events == [(CatalogEvent.FETCH_FAILED, CatalogKind.SOUNDS)]

    async def test_later_fetch_retries(self, fake_api, sounds):
        """After a failure, the next call goes to the device again."""
        fake_api.fail("list_sounds")
        cache = CatalogCache(fake_api)
        await cache.fetch_sounds()

        fake_api.succeed("list_sounds")
        result = await cache.fetch_sounds()

        assert result == tuple(sounds)
        assert len(fake_api.calls_to("list_sounds")) == 2
        assert cache.last_error(CatalogKind.SOUNDS) is None

    async def test_decode_failure_reported(self, fake_api):
        """A malformed payload is reported like any other failure."""
        fake_api.fail("list_sections", error=DecodeFailed("list_sections", "not a list"))
        cache = CatalogCache(fake_api)

        assert await cache.fetch_sections() == ()
        assert isinstance(cache.last_error(CatalogKind.SECTIONS), DecodeFailed)

    async def test_unexpected_error_wrapped(self, fake_api):
        """Non-remote exceptions are wrapped as RemoteFetchFailed."""
        fake_api.fail("list_scenes", error=OSError("network is down"))
        cache = CatalogCache(fake_api)

        assert await cache.fetch_scenes() == ()
        error = cache.last_error(CatalogKind.SCENES)
        assert isinstance(error, RemoteFetchFailed)
        assert "network is down" in error.technical_message


@pytest.mark.unit
@pytest.mark.asyncio
class TestCatalogInvalidation:
    """Test invalidate and refresh."""

    async def test_refresh_refetches(self, fake_api, sounds):
        """Test pull-to-refresh."""
        cache = CatalogCache(fake_api)
        await cache.fetch_sounds()

        await cache.refresh(CatalogKind.SOUNDS)

        assert len(fake_api.calls_to("list_sounds")) == 2
        assert cache.sounds == tuple(sounds)

    async def test_invalidate_all(self, fake_api, observer):
        """Invalidating without a kind clears everything."""
        cache = CatalogCache(fake_api)
        await cache.fetch_all()
        cache.register_observer(observer)

        cache.invalidate()

        assert cache.sections == cache.sounds == cache.scenes == ()
        assert {kind for _, kind in observer.catalog_events} == set(CatalogKind)
        assert all(event is CatalogEvent.INVALIDATED for event, _ in observer.catalog_events)
