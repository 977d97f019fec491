"""
Playlist edit orchestrator.
Classifies a free-text command, dispatches it to the strategy for its type
and returns that strategy's result unchanged.
"""

import logging
from typing import Any, Dict, List, Optional, Union
from pydantic import ValidationError
from config.settings import EditorDefaults, Settings
from playlist_editor.api.interfaces import CatalogSearch, TextCompletion
from playlist_editor.api.openai_client import OpenAICompletionClient
from playlist_editor.api.spotify_client import SpotifyClient
from playlist_editor.exceptions import InvalidParameterError, UnknownCommandTypeError
from playlist_editor.models.edit_command import CommandType, EditCommand
from playlist_editor.models.edit_result import EditResult
from playlist_editor.models.preferences import UserPreferences
from playlist_editor.models.track import Track
from playlist_editor.services.base_strategy import EditStrategy
from playlist_editor.services.command_classifier import CommandClassifier
from playlist_editor.services.mood_transformer import MoodTransformer
from playlist_editor.services.playlist_expander import PlaylistExpander
from playlist_editor.services.playlist_refiner import PlaylistRefiner
from playlist_editor.services.theme_applier import ThemeApplier
from playlist_editor.services.track_filter import TrackFilter
from playlist_editor.services.track_sorter import TrackSorter
from playlist_editor.utils.cache_manager import CacheManager

logger = logging.getLogger(__name__)

PreferencesInput = Union[UserPreferences, Dict[str, Any], None]

class PlaylistEditor:
    """
    Single entry point of the edit engine.

    The editor holds no per-playlist state. Two edits of the same playlist
    must not run concurrently: each reads the current tracks and returns a
    full replacement, so the caller serializes edits per playlist.
    """

    def __init__(
        self,
        completion: TextCompletion,
        catalog: Optional[CatalogSearch] = None,
        defaults: Optional[EditorDefaults] = None,
        apply_mood_replacements: bool = False,
        cache_manager: Optional[CacheManager] = None
    ):
        """
        Initialize the editor.

        Args:
            completion: Text-completion oracle for classification and suggestions
            catalog: Catalog search used by expand and mood replacement
            defaults: Threshold and missing-value policy for the strategies
            apply_mood_replacements: Let `transform` swap tracks instead of only reporting
            cache_manager: Cache owned by the editor, closed with it
        """
        self.defaults = defaults or EditorDefaults()
        self.catalog = catalog
        self.cache_manager = cache_manager
        self.classifier = CommandClassifier(completion)
        self.strategies: Dict[CommandType, EditStrategy] = {
            CommandType.FILTER: TrackFilter(self.defaults),
            CommandType.SORT: TrackSorter(self.defaults),
            CommandType.TRANSFORM: MoodTransformer(
                completion, catalog, apply_mood_replacements, self.defaults
            ),
            CommandType.EXPAND: PlaylistExpander(catalog, completion, self.defaults),
            CommandType.REFINE: PlaylistRefiner(self.defaults),
            CommandType.THEME: ThemeApplier(self.defaults),
        }

        missing = set(CommandType) - set(self.strategies)
        if missing:
            raise RuntimeError(f"No strategy registered for: {sorted(t.value for t in missing)}")

    @classmethod
    def from_settings(cls, settings: Settings) -> 'PlaylistEditor':
        """Build an editor wired to OpenAI and, when configured, Spotify."""
        settings.validate(require_openai=True)

        completion = OpenAICompletionClient(
            api_key=settings.OPENAI_API_KEY,
            model=settings.OPENAI_MODEL,
            timeout=settings.openai.timeout,
            temperature=settings.OPENAI_TEMPERATURE,
            base_url=settings.openai.base_url
        )

        catalog = None
        cache_manager = None
        if settings.spotify_configured:
            cache_manager = CacheManager(settings.cache.redis_url)
            catalog = SpotifyClient(
                client_id=settings.SPOTIFY_CLIENT_ID,
                client_secret=settings.SPOTIFY_CLIENT_SECRET,
                cache_manager=cache_manager,
                market=settings.SPOTIFY_MARKET,
                rate_limit=settings.spotify.rate_limit_per_minute,
                search_ttl=settings.cache.search_ttl
            )
        else:
            logger.info("Spotify credentials not configured; expand and mood replacement run without a catalog")

        return cls(
            completion=completion,
            catalog=catalog,
            defaults=settings.editor,
            apply_mood_replacements=settings.APPLY_MOOD_REPLACEMENTS,
            cache_manager=cache_manager
        )

    async def __aenter__(self):
        """Async context manager entry."""
        if self.cache_manager:
            await self.cache_manager.connect()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Async context manager exit."""
        if isinstance(self.catalog, SpotifyClient):
            await self.catalog.close()
        if self.cache_manager:
            await self.cache_manager.close()

    async def process_command(
        self,
        tracks: List[Track],
        command: str,
        user_preferences: PreferencesInput = None
    ) -> EditResult:
        """
        Classify a free-text command and apply it.

        Args:
            tracks: Current tracks in playlist order, as read by the caller
            command: Free-text edit instruction
            user_preferences: Optional preferences, model or request dict

        Returns:
            The strategy's EditResult, unchanged

        Raises:
            ClassificationError: If the command could not be understood
            UnknownCommandTypeError: If the classified type has no strategy
            UnknownActionError: If the classified action is not known for its type
            InvalidParameterError: If the command or preferences are malformed
        """
        preferences = self._coerce_preferences(user_preferences)
        edit_command = await self.classifier.classify(command)
        return await self.apply_command(tracks, edit_command, preferences)

    async def apply_command(
        self,
        tracks: List[Track],
        command: EditCommand,
        preferences: Optional[UserPreferences] = None
    ) -> EditResult:
        """Dispatch an already structured command to its strategy."""
        strategy = self.strategies.get(command.type)
        if strategy is None:
            raise UnknownCommandTypeError(str(command.type))

        logger.info(f"Applying {command.type.value}/{command.action} to {len(tracks)} tracks")
        result = await strategy.apply(list(tracks), command, preferences)
        logger.info(f"{command.action}: {len(tracks)} -> {len(result.tracks)} tracks, {len(result.changes)} changes")
        return result

    def _coerce_preferences(self, user_preferences: PreferencesInput) -> Optional[UserPreferences]:
        if user_preferences is None or isinstance(user_preferences, UserPreferences):
            return user_preferences
        try:
            return UserPreferences.model_validate(user_preferences)
        except ValidationError as e:
            raise InvalidParameterError(f"Invalid user preferences: {e.error_count()} invalid fields") from e
