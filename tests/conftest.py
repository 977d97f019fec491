"""
Pytest configuration and shared fixtures for the playlist editor tests.
"""

import json
import pytest
from typing import List
from unittest.mock import AsyncMock

from playlist_editor.api.interfaces import CatalogSearch, TextCompletion
from playlist_editor.models.audio_features import AudioFeatures
from playlist_editor.models.track import Track

def make_track(
    track_id: str,
    name: str = None,
    artist: str = "Test Artist",
    duration_ms: int = 180000,
    position: int = 0,
    energy: float = None,
    valence: float = None,
    tempo: float = None,
    release_date: str = None,
    genres: List[str] = None,
    catalog_id: str = None
) -> Track:
    """Build a track with only the attributes a test cares about."""
    return Track(
        id=track_id,
        catalog_id=catalog_id or f"sp_{track_id}",
        name=name or f"Song {track_id}",
        artist=artist,
        album="Test Album",
        duration_ms=duration_ms,
        position=position,
        audio_features=AudioFeatures(energy=energy, valence=valence, tempo=tempo),
        release_date=release_date,
        genres=genres or []
    )

class FakeCompletion(TextCompletion):
    """Completion oracle replaying canned replies and recording prompts."""

    def __init__(self, *replies):
        self.replies = list(replies)
        self.calls = []

    async def complete(self, system_instructions: str, user_text: str) -> str:
        self.calls.append((system_instructions, user_text))
        reply = self.replies.pop(0)
        if isinstance(reply, Exception):
            raise reply
        if isinstance(reply, dict):
            return json.dumps(reply)
        return reply

class FakeCatalog(CatalogSearch):
    """Catalog returning preset results per query, or a default list."""

    def __init__(self, results=None, default=None, error=None):
        self.results = results or {}
        self.default = default or []
        self.error = error
        self.queries = []

    async def search(self, query: str, limit: int = 10) -> List[Track]:
        self.queries.append((query, limit))
        if self.error:
            raise self.error
        return list(self.results.get(query, self.default))[:limit]

@pytest.fixture
def track_factory():
    """Factory for building tracks inline."""
    return make_track

@pytest.fixture
def sample_tracks():
    """Five tracks spanning energy, tempo and release years."""
    return [
        make_track("t1", name="Morning Dew", energy=0.1, tempo=80.0, release_date="1994-05-01", genres=["ambient"]),
        make_track("t2", name="Firestarter", energy=0.9, tempo=140.0, release_date="1997", genres=["big beat"]),
        make_track("t3", name="Steady", energy=0.5, tempo=110.0, release_date="2005-09", genres=["indie rock"]),
        make_track("t4", name="Slow Tide", energy=0.2, tempo=70.0, release_date="2012-01-10", genres=["ambient", "downtempo"]),
        make_track("t5", name="Overdrive", energy=0.95, tempo=170.0, release_date="2020-03-03", genres=["drum and bass"]),
    ]

@pytest.fixture
def mock_completion():
    """AsyncMock completion oracle."""
    completion = AsyncMock(spec=TextCompletion)
    completion.complete.return_value = "{}"
    return completion

@pytest.fixture
def fake_completion():
    """Factory for FakeCompletion with canned replies."""
    return FakeCompletion

@pytest.fixture
def fake_catalog():
    """Factory for FakeCatalog."""
    return FakeCatalog
