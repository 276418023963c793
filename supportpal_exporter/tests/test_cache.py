"""
Tests for the memoizing reference cache
"""
import asyncio
import pytest
from unittest.mock import AsyncMock

from supportpal_exporter.models.schemas import Organization
from supportpal_exporter.services.cache import ReferenceCache
from supportpal_exporter.services.errors import TransportError


class TestReferenceCache:
    """Test get-or-fetch behaviour"""

    @pytest.mark.asyncio
    async def test_fetches_once(self):
        cache = ReferenceCache[Organization]("organisation")
        fetch = AsyncMock(return_value=Organization(id=5, name="One Org"))

        first = await cache.get_or_fetch(5, fetch)
        second = await cache.get_or_fetch(5, fetch)

        fetch.assert_awaited_once_with(5)
        assert first is second
        assert (cache.hits, cache.misses) == (1, 1)
        assert len(cache) == 1

    @pytest.mark.asyncio
    async def test_concurrent_lookups_share_one_fetch(self):
        cache = ReferenceCache[Organization]("organisation")

        async def slow_fetch(key):
            await asyncio.sleep(0.01)
            return Organization(id=key, name="Slow Org")

        fetch = AsyncMock(side_effect=slow_fetch)
        results = await asyncio.gather(*(cache.get_or_fetch(3, fetch) for _ in range(5)))

        assert fetch.await_count == 1
        assert all(result is results[0] for result in results)

    @pytest.mark.asyncio
    async def test_failed_fetch_is_not_stored(self):
        cache = ReferenceCache[Organization]("organisation")
        fetch = AsyncMock(side_effect=[
            TransportError("timeout"),
            Organization(id=8, name="Eight"),
        ])

        with pytest.raises(TransportError):
            await cache.get_or_fetch(8, fetch)
        assert 8 not in cache

        organization = await cache.get_or_fetch(8, fetch)
        assert organization.name == "Eight"
        assert fetch.await_count == 2

    @pytest.mark.asyncio
    async def test_keys_are_independent(self):
        cache = ReferenceCache[Organization]("organisation")
        fetch = AsyncMock(side_effect=lambda key: Organization(id=key, name=f"org-{key}"))

        assert (await cache.get_or_fetch(1, fetch)).name == "org-1"
        assert (await cache.get_or_fetch(2, fetch)).name == "org-2"
        assert fetch.await_count == 2
