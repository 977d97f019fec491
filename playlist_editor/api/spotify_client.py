"""
Spotify Web API client implementing catalog search for the edit engine.
Uses the OAuth 2.0 Client Credentials flow; no user session is involved.
"""

import base64
import logging
from typing import Dict, List, Optional
from datetime import datetime, timedelta
import aiohttp
from playlist_editor.api.base_client import BaseAPIClient, AuthenticationError
from playlist_editor.api.interfaces import CatalogSearch
from playlist_editor.models.track import Track
from playlist_editor.utils.cache_manager import CacheManager

logger = logging.getLogger(__name__)

MAX_SEARCH_LIMIT = 50

class SpotifyClient(BaseAPIClient, CatalogSearch):
    """Spotify catalog search client."""

    def __init__(
        self,
        client_id: str,
        client_secret: str,
        cache_manager: Optional[CacheManager] = None,
        market: str = "US",
        rate_limit: int = 100,
        search_ttl: int = 86400
    ):
        """
        Initialize Spotify client.

        Args:
            client_id: Spotify application client ID
            client_secret: Spotify application client secret
            cache_manager: Optional cache for search responses
            market: ISO country code used to filter playable tracks
            rate_limit: Requests per minute
            search_ttl: Seconds a cached search response stays valid
        """
        super().__init__(
            base_url="https://api.spotify.com/v1",
            rate_limit=rate_limit,
            cache_manager=cache_manager
        )
        self.client_id = client_id
        self.client_secret = client_secret
        self.market = market
        self.search_ttl = search_ttl
        self.auth_url = "https://accounts.spotify.com/api/token"

    async def authenticate(self) -> str:
        """Authenticate using OAuth 2.0 Client Credentials flow."""
        await self._ensure_session()

        credentials = f"{self.client_id}:{self.client_secret}"
        encoded_credentials = base64.b64encode(credentials.encode()).decode()

        headers = {
            "Authorization": f"Basic {encoded_credentials}",
            "Content-Type": "application/x-www-form-urlencoded"
        }

        try:
            async with self.session.post(
                self.auth_url, headers=headers, data={"grant_type": "client_credentials"}
            ) as response:
                response.raise_for_status()
                token_data = await response.json()
        except aiohttp.ClientError as e:
            logger.error(f"Spotify authentication failed: {e}")
            raise AuthenticationError(f"Failed to authenticate with Spotify: {e}") from e

        expires_in = token_data.get("expires_in", 3600)
        self._token_expires_at = datetime.now() + timedelta(seconds=expires_in - 60)
        return token_data["access_token"]

    def _get_auth_headers(self) -> Dict[str, str]:
        """Get authentication headers for API requests."""
        if self._auth_token:
            return {"Authorization": f"Bearer {self._auth_token}"}
        return {}

    async def search(self, query: str, limit: int = 10) -> List[Track]:
        """
        Search for tracks on Spotify.

        Args:
            query: Free-text or field-filtered query ("genre:jazz year:1990-1999")
            limit: Maximum number of results (1-50)

        Returns:
            List of Track objects, positioned in result order
        """
        limit = max(1, min(limit, MAX_SEARCH_LIMIT))
        params = {
            "q": query,
            "type": "track",
            "limit": limit,
            "market": self.market
        }

        if self.cache_manager:
            cache_key = self.cache_manager.get_cache_key("spotify_search", query, limit, self.market)
            result = await self._cached_request(cache_key, "GET", "search", ttl=self.search_ttl, params=params)
        else:
            result = await self._make_request("GET", "search", params=params)

        items = result.get("tracks", {}).get("items", [])
        tracks = []
        for item in items:
            if not item or not item.get("id"):
                continue
            tracks.append(Track.from_spotify_data(item, position=len(tracks)))

        logger.debug(f"Spotify search {query!r} returned {len(tracks)} tracks")
        return tracks
