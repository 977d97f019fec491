"""
Transform strategy: shifts a playlist toward a target mood.

The completion oracle proposes replacements for tracks that do not fit the
mood. By default nothing is swapped: the result keeps the original tracks
and reports how many candidates were identified. Swapping is opt-in
(`apply_replacements`) and needs a catalog to resolve each suggestion.
"""

import logging
from dataclasses import replace
from typing import Any, Dict, List, Optional
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

MOOD_SYSTEM_PROMPT = "You are a music expert specializing in mood transformation."

MOOD_PROMPT = """Transform this playlist to match the mood: "{mood}".

Current tracks: {tracks}

Suggest replacements only for tracks that do not match the target mood. Return JSON:
{{"replacements": [{{"original": "track name", "replacement": "new track name", "artist": "artist name", "reason": "short explanation"}}]}}"""

class MoodTransformer(EditStrategy):
    """Implements the `transform` command type."""

    command_type = CommandType.TRANSFORM

    def __init__(
        self,
        completion: TextCompletion,
        catalog: Optional[CatalogSearch] = None,
        apply_replacements: bool = False,
        defaults: Optional[EditorDefaults] = None
    ):
        super().__init__(defaults)
        self.completion = completion
        self.catalog = catalog
        self.apply_replacements = apply_replacements

    async def apply(
        self,
        tracks: List[Track],
        command: EditCommand,
        preferences: Optional[UserPreferences] = None
    ) -> EditResult:
        self._check_command(command)
        mood = command.get("target_mood", "the requested mood")

        if not tracks:
            return EditResult(
                tracks=[],
                explanation=f"No tracks to transform toward mood: {mood}",
                changes=[]
            )

        try:
            suggestions = await self.suggest_replacements(tracks, mood)
        except ExternalServiceError as e:
            logger.warning(f"Mood suggestion lookup failed: {e}")
            return EditResult(
                tracks=list(tracks),
                explanation=f"Could not analyze the playlist for mood: {mood}; no changes were made",
                changes=[]
            )

        candidates = self._match_candidates(tracks, suggestions)
        changes = [self._describe(tracks[index], suggestion) for index, suggestion in candidates]
        changes.append(f"Analyzed {len(tracks)} tracks for mood transformation: {mood}")

        if not (self.apply_replacements and self.catalog and candidates):
            return EditResult(
                tracks=list(tracks),
                explanation=(
                    f"No automatic replacement performed; {len(candidates)} candidates "
                    f"identified for mood: {mood}"
                ),
                changes=changes
            )

        return await self._replace(tracks, candidates, mood)

    async def suggest_replacements(self, tracks: List[Track], mood: str) -> List[Dict[str, Any]]:
        """Ask the completion oracle for replacement suggestions."""
        prompt = MOOD_PROMPT.format(
            mood=mood,
            tracks=", ".join(f"{track.name} by {track.artist}" for track in tracks)
        )
        reply = await self.completion.complete(MOOD_SYSTEM_PROMPT, prompt)

        payload = extract_first_json_object(reply)
        if payload is None:
            raise ExternalServiceError("Mood suggestions were not valid JSON")

        replacements = payload.get("replacements", [])
        if not isinstance(replacements, list):
            raise ExternalServiceError("Mood suggestions had no replacements list")

        return [
            item for item in replacements
            if isinstance(item, dict) and item.get("original") and item.get("replacement")
        ]

    def _match_candidates(self, tracks: List[Track], suggestions: List[Dict[str, Any]]):
        """Pair each suggestion with the first unclaimed track whose name contains `original`."""
        claimed = set()
        candidates = []
        for suggestion in suggestions:
            original = str(suggestion["original"]).lower()
            for index, track in enumerate(tracks):
                if index not in claimed and original in track.name.lower():
                    claimed.add(index)
                    candidates.append((index, suggestion))
                    break
        return candidates

    def _describe(self, track: Track, suggestion: Dict[str, Any], applied: bool = False) -> str:
        replacement = suggestion["replacement"]
        if suggestion.get("artist"):
            replacement = f"{replacement} by {suggestion['artist']}"
        verb = "Replaced" if applied else "Suggested replacing"
        text = f"{verb} {track.name} with {replacement}"
        if suggestion.get("reason"):
            text += f" ({suggestion['reason']})"
        return text

    async def _replace(self, tracks: List[Track], candidates, mood: str) -> EditResult:
        """Resolve each candidate in the catalog and swap it in place."""
        updated = list(tracks)
        changes = []
        replaced = 0
        existing_ids = {track.catalog_id for track in tracks}

        try:
            for index, suggestion in candidates:
                query = f"{suggestion['replacement']} {suggestion.get('artist') or ''}".strip()
                results = await self.catalog.search(query, self.defaults.replacement_results_per_query)
                found = next((t for t in results if t.catalog_id not in existing_ids), None)
                if found is None:
                    # unresolved suggestions stay listed as suggestions
                    changes.append(self._describe(updated[index], suggestion))
                    continue

                original = updated[index]
                updated[index] = replace(
                    found,
                    id=original.id,
                    position=original.position,
                )
                existing_ids.add(found.catalog_id)
                replaced += 1
                changes.append(self._describe(original, {
                    "replacement": found.name,
                    "artist": found.artist,
                    "reason": suggestion.get("reason"),
                }, applied=True))
        except ExternalServiceError as e:
            logger.warning(f"Catalog lookup for mood replacements failed: {e}")
            return EditResult(
                tracks=list(tracks),
                explanation=f"Could not look up replacements for mood: {mood}; no changes were made",
                changes=[]
            )

        changes.append(f"Analyzed {len(tracks)} tracks for mood transformation: {mood}")
        return EditResult(
            tracks=updated,
            explanation=f"Replaced {replaced} of {len(candidates)} candidate tracks to match mood: {mood}",
            changes=changes
        )
