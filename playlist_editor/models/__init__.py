"""Data models for the playlist edit engine."""

from .audio_features import AudioFeatures
from .track import Track
from .playlist import Playlist
from .preferences import UserPreferences
from .edit_result import EditResult
from .edit_command import (
    CommandType,
    EditCommand,
    FilterCommand,
    SortCommand,
    TransformCommand,
    ExpandCommand,
    RefineCommand,
    ThemeCommand,
    ACTION_TABLE,
    parse_edit_command,
)

__all__ = [
    'AudioFeatures',
    'Track',
    'Playlist',
    'UserPreferences',
    'EditResult',
    'CommandType',
    'EditCommand',
    'FilterCommand',
    'SortCommand',
    'TransformCommand',
    'ExpandCommand',
    'RefineCommand',
    'ThemeCommand',
    'ACTION_TABLE',
    'parse_edit_command'
]
