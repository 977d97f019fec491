"""
Narrow contracts for the two external services the edit engine talks to.
Strategies and the classifier depend only on these, so tests can pass fakes.
"""

from abc import ABC, abstractmethod
from typing import List
from playlist_editor.models.track import Track

class TextCompletion(ABC):
    """Single-turn text-completion oracle."""

    @abstractmethod
    async def complete(self, system_instructions: str, user_text: str) -> str:
        """
        Return the completion text, expected to parse as one JSON object.

        Raises:
            ExternalServiceError: If the call fails or times out
        """

class CatalogSearch(ABC):
    """Music catalog free-text search."""

    @abstractmethod
    async def search(self, query: str, limit: int = 10) -> List[Track]:
        """
        Return up to `limit` candidate tracks for a query.

        Raises:
            ExternalServiceError: If the catalog cannot be reached
        """
