"""
Expand strategy: grows a playlist toward a target size.

Search queries are derived from the expansion type and the playlist's own
artists, genres and release years (plus the user's favourite artists and
preferred genres). When a completion oracle is wired its suggested queries
are tried first. Results already in the playlist are skipped by catalog ID
and new tracks are appended at increasing positions.
"""

import logging
from collections import Counter
from dataclasses import replace
from typing import List, Optional
from config.settings import EditorDefaults
from playlist_editor.api.interfaces import CatalogSearch, TextCompletion
from playlist_editor.exceptions import ExternalServiceError
from playlist_editor.models.edit_command import CommandType, EditCommand
from playlist_editor.models.edit_result import EditResult
from playlist_editor.models.preferences import UserPreferences
from playlist_editor.models.track import Track
from playlist_editor.services.base_strategy import EditStrategy
from playlist_editor.utils.track_utils import extract_first_json_object

logger = logging.getLogger(__name__)

MAX_SEED_VALUES = 5

EXPAND_SYSTEM_PROMPT = "You are a music expert expanding playlists."

EXPAND_PROMPT = """Suggest catalog search queries for songs that fit this playlist.
Current tracks: {tracks}
Expansion type: {expansion_type}
Return JSON: {{"queries": ["query 1", "query 2"]}}"""

class PlaylistExpander(EditStrategy):
    """Implements the `expand` command type."""

    command_type = CommandType.EXPAND

    def __init__(
        self,
        catalog: Optional[CatalogSearch] = None,
        completion: Optional[TextCompletion] = None,
        defaults: Optional[EditorDefaults] = None
    ):
        super().__init__(defaults)
        self.catalog = catalog
        self.completion = completion

    async def apply(
        self,
        tracks: List[Track],
        command: EditCommand,
        preferences: Optional[UserPreferences] = None
    ) -> EditResult:
        self._check_command(command)
        expansion_type = command.get("expansion_type", self.defaults.default_expansion_type)
        target_size = command.get("target_size", len(tracks) * 2)
        wanted = target_size - len(tracks)

        if wanted <= 0:
            return EditResult(
                tracks=list(tracks),
                explanation=f"Playlist already has {len(tracks)} tracks; no expansion needed",
                changes=[f"Target size {target_size} is not larger than the current {len(tracks)} tracks"]
            )

        if self.catalog is None:
            return EditResult(
                tracks=list(tracks),
                explanation=f"No catalog search is configured; no {expansion_type} tracks were added",
                changes=[f"Planned expansion: {expansion_type} tracks up to {target_size} total"]
            )

        try:
            queries = await self.build_queries(tracks, expansion_type, preferences)
            new_tracks = await self._collect(tracks, queries, wanted)
        except ExternalServiceError as e:
            logger.warning(f"Playlist expansion failed: {e}")
            return EditResult(
                tracks=list(tracks),
                explanation=f"Could not search the catalog for {expansion_type} tracks; no changes were made",
                changes=[]
            )

        return EditResult(
            tracks=list(tracks) + new_tracks,
            explanation=f"Expanded playlist with {len(new_tracks)} {expansion_type} tracks",
            changes=[
                f"Searched the catalog with {len(queries)} queries for {expansion_type} tracks",
                f"Added {len(new_tracks)} tracks (target {target_size})"
            ]
        )

    async def build_queries(
        self,
        tracks: List[Track],
        expansion_type: str,
        preferences: Optional[UserPreferences] = None
    ) -> List[str]:
        """Oracle-suggested queries (if any) followed by queries derived from the tracks."""
        queries = []
        if self.completion is not None and tracks:
            try:
                queries.extend(await self._suggested_queries(tracks, expansion_type))
            except ExternalServiceError as e:
                logger.warning(f"Query suggestions unavailable, using derived queries: {e}")
        queries.extend(self.derive_queries(tracks, expansion_type, preferences))

        unique = []
        for query in queries:
            if query and query not in unique:
                unique.append(query)
        return unique

    def derive_queries(
        self,
        tracks: List[Track],
        expansion_type: str,
        preferences: Optional[UserPreferences] = None
    ) -> List[str]:
        """Catalog search queries built from the playlist's own metadata."""
        kind = expansion_type.lower().replace("-", " ").replace("_", " ")

        artists = self._most_common([track.artist for track in tracks])
        genres = self._most_common([genre for track in tracks for genre in track.genres])
        if preferences:
            artists = preferences.favorite_artists[:MAX_SEED_VALUES] + artists
            genres = preferences.preferred_genres[:MAX_SEED_VALUES] + genres

        artist_queries = [f'artist:"{artist}"' for artist in artists]
        genre_queries = [f'genre:"{genre}"' for genre in genres]

        if "era" in kind or "decade" in kind or "year" in kind:
            years = [track.release_year for track in tracks if track.release_year]
            if years:
                era = f"year:{min(years)}-{max(years)}"
                return [f"{era} {query}" for query in genre_queries] or [era]
            return artist_queries

        if "genre" in kind:
            return genre_queries or artist_queries

        if "similar" in kind or "artist" in kind:
            return artist_queries + genre_queries

        # Free-form expansion types ("more 80s synthpop") are searched as given
        return [expansion_type] + artist_queries

    async def _suggested_queries(self, tracks: List[Track], expansion_type: str) -> List[str]:
        prompt = EXPAND_PROMPT.format(
            tracks=", ".join(f"{track.name} by {track.artist}" for track in tracks),
            expansion_type=expansion_type
        )
        reply = await self.completion.complete(EXPAND_SYSTEM_PROMPT, prompt)
        payload = extract_first_json_object(reply) or {}
        queries = payload.get("queries", [])
        if not isinstance(queries, list):
            return []
        return [query.strip() for query in queries if isinstance(query, str) and query.strip()]

    async def _collect(self, tracks: List[Track], queries: List[str], wanted: int) -> List[Track]:
        existing_ids = {track.catalog_id for track in tracks}
        new_tracks: List[Track] = []

        for query in queries:
            results = await self.catalog.search(query, self.defaults.expansion_results_per_query)
            for found in results:
                if found.catalog_id in existing_ids:
                    continue
                existing_ids.add(found.catalog_id)
                new_tracks.append(replace(found, position=len(tracks) + len(new_tracks)))
                if len(new_tracks) >= wanted:
                    return new_tracks

        logger.debug(f"Expansion found {len(new_tracks)} of {wanted} wanted tracks")
        return new_tracks

    def _most_common(self, values: List[str]) -> List[str]:
        counts = Counter(value for value in values if value)
        return [value for value, _ in counts.most_common(MAX_SEED_VALUES)]
