#!/usr/bin/env python3
"""
Unit tests for the Spotify catalog search client.
"""

import pytest
from unittest.mock import AsyncMock, patch
from playlist_editor.api.base_client import APIError
from playlist_editor.api.spotify_client import SpotifyClient
from playlist_editor.utils.cache_manager import CacheManager

SEARCH_RESPONSE = {
    "tracks": {
        "items": [
            {
                "id": "abc",
                "name": "Teardrop",
                "artists": [{"name": "Massive Attack"}],
                "album": {"name": "Mezzanine", "release_date": "1998-04-20", "images": []},
                "duration_ms": 330000,
                "popularity": 70
            },
            None,
            {
                "id": "def",
                "name": "Glory Box",
                "artists": [{"name": "Portishead"}],
                "album": {"name": "Dummy", "release_date": "1994"},
                "duration_ms": 305000
            }
        ]
    }
}

class TestSpotifyClient:
    """Unit tests for SpotifyClient search."""

    @pytest.mark.asyncio
    async def test_search_maps_items_to_tracks(self):
        client = SpotifyClient("id", "secret", market="GB")

        with patch.object(client, "_make_request", new=AsyncMock(return_value=SEARCH_RESPONSE)) as request:
            tracks = await client.search('genre:"trip hop"', limit=5)

        assert [t.catalog_id for t in tracks] == ["abc", "def"]
        assert [t.position for t in tracks] == [0, 1]
        assert tracks[0].release_year == 1998
        request.assert_awaited_once_with("GET", "search", params={
            "q": 'genre:"trip hop"', "type": "track", "limit": 5, "market": "GB"
        })

    @pytest.mark.asyncio
    async def test_search_clamps_limit(self):
        client = SpotifyClient("id", "secret")

        with patch.object(client, "_make_request", new=AsyncMock(return_value={})) as request:
            assert await client.search("anything", limit=500) == []

        assert request.call_args.kwargs["params"]["limit"] == 50

    @pytest.mark.asyncio
    async def test_search_uses_cache(self):
        cache = CacheManager()
        client = SpotifyClient("id", "secret", cache_manager=cache)

        with patch.object(client, "_make_request", new=AsyncMock(return_value=SEARCH_RESPONSE)) as request:
            first = await client.search("Teardrop")
            second = await client.search("teardrop")

        assert first == second
        request.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_search_failure_is_api_error(self):
        client = SpotifyClient("id", "secret")

        with patch.object(client, "_make_request", new=AsyncMock(side_effect=APIError("boom"))):
            with pytest.raises(APIError):
                await client.search("x")

    def test_auth_headers(self):
        client = SpotifyClient("id", "secret")
        assert client._get_auth_headers() == {}

        client._auth_token = "token"
        assert client._get_auth_headers() == {"Authorization": "Bearer token"}

class TestCacheManager:
    """Unit tests for the in-memory cache path."""

    @pytest.mark.asyncio
    async def test_set_and_get(self):
        cache = CacheManager()

        await cache.set("k", {"v": 1}, ttl=60)

        assert await cache.get("k") == {"v": 1}
        assert await cache.get("missing") is None

    @pytest.mark.asyncio
    async def test_expired_entry(self):
        cache = CacheManager()

        await cache.set("k", "v", ttl=0)

        assert await cache.get("k") is None

    @pytest.mark.asyncio
    async def test_eviction_keeps_newest(self):
        cache = CacheManager(max_memory_items=2)

        for key in ("a", "b", "c"):
            await cache.set(key, key, ttl=60)

        assert await cache.get("a") is None
        assert await cache.get("c") == "c"

    @pytest.mark.asyncio
    async def test_connect_without_url_is_memory_only(self):
        cache = CacheManager()

        await cache.connect()

        assert cache.redis is None
        await cache.close()

    def test_cache_key_is_normalized(self):
        assert CacheManager.get_cache_key("spotify_search", " Teardrop ", 5) == "spotify_search:teardrop:5"
