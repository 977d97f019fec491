"""
User preference model consumed read-only by the edit strategies.
"""

from typing import List, Optional, Tuple
from pydantic import BaseModel, ConfigDict, Field, field_validator

class UserPreferences(BaseModel):
    """Pydantic model for the optional preferences sent with an edit request."""
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    favorite_artists: List[str] = Field(default_factory=list, alias="favoriteArtists")
    avoid_artists: List[str] = Field(default_factory=list, alias="avoidArtists")
    banned_songs: List[str] = Field(default_factory=list, alias="bannedSongs")
    preferred_bpm_range: Optional[Tuple[float, float]] = Field(None, alias="preferredBpmRange")
    preferred_genres: List[str] = Field(default_factory=list, alias="preferredGenres")

    @field_validator("favorite_artists", "avoid_artists", "banned_songs", "preferred_genres", mode="before")
    @classmethod
    def _none_as_empty(cls, value):
        return [] if value is None else value

    @field_validator("preferred_bpm_range")
    @classmethod
    def _ordered_range(cls, value):
        if value is not None and value[0] > value[1]:
            raise ValueError("Minimum BPM cannot be greater than maximum")
        return value
