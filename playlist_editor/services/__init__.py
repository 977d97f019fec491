"""Command classification, edit strategies and the edit orchestrator."""

from .base_strategy import EditStrategy, PureEditStrategy
from .command_classifier import CommandClassifier
from .track_filter import TrackFilter
from .track_sorter import TrackSorter
from .mood_transformer import MoodTransformer
from .playlist_expander import PlaylistExpander
from .playlist_refiner import PlaylistRefiner
from .theme_applier import ThemeApplier
from .editor import PlaylistEditor

__all__ = [
    'EditStrategy',
    'PureEditStrategy',
    'CommandClassifier',
    'TrackFilter',
    'TrackSorter',
    'MoodTransformer',
    'PlaylistExpander',
    'PlaylistRefiner',
    'ThemeApplier',
    'PlaylistEditor'
]
