"""Clients for the external services used by the edit engine."""

from .interfaces import TextCompletion, CatalogSearch
from .base_client import BaseAPIClient, APIError, RateLimitError, AuthenticationError
from .spotify_client import SpotifyClient
from .openai_client import OpenAICompletionClient

__all__ = [
    'TextCompletion',
    'CatalogSearch',
    'BaseAPIClient',
    'APIError',
    'RateLimitError',
    'AuthenticationError',
    'SpotifyClient',
    'OpenAICompletionClient'
]
