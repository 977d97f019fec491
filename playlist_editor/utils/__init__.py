"""Utility modules for the playlist edit engine."""

from .cache_manager import CacheManager
from .rate_limiter import RateLimiter
from .validators import ParameterValidator, validate_track_data, validate_playlist_data
from .track_utils import (
    format_duration,
    release_year,
    value_or_default,
    contains_any,
    is_mostly_english,
    extract_first_json_object,
)

__all__ = [
    'CacheManager',
    'RateLimiter',
    'ParameterValidator',
    'validate_track_data',
    'validate_playlist_data',
    'format_duration',
    'release_year',
    'value_or_default',
    'contains_any',
    'is_mostly_english',
    'extract_first_json_object'
]
