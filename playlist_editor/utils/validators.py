"""
Input validation utilities for edit command parameters and playlist files.
"""

from typing import Dict, Any, List, Optional
from playlist_editor.exceptions import InvalidParameterError

# Parameter kinds understood by ParameterValidator.validate
NUMBER = "number"
FRACTION = "fraction"
YEAR = "year"
COUNT = "count"
BOOLEAN = "boolean"
TEXT = "text"
TEXT_LIST = "text_list"

class ParameterValidator:
    """Validator that coerces raw command parameters to their declared kinds."""

    @classmethod
    def validate_number(cls, name: str, value: Any) -> float:
        """Validate a non-negative number (durations, BPM)."""
        if isinstance(value, bool):
            raise InvalidParameterError(f"{name} must be numeric, got a boolean")

        try:
            value = float(value)
        except (ValueError, TypeError):
            raise InvalidParameterError(f"{name} must be numeric, got {value!r}")

        if value < 0:
            raise InvalidParameterError(f"{name} cannot be negative, got {value}")

        return value

    @classmethod
    def validate_fraction(cls, name: str, value: Any) -> float:
        """Validate a 0.0-1.0 audio attribute threshold."""
        value = cls.validate_number(name, value)
        if value > 1.0:
            raise InvalidParameterError(f"{name} must be between 0.0 and 1.0, got {value}")
        return value

    @classmethod
    def validate_year(cls, name: str, value: Any) -> int:
        """Validate a four digit release year."""
        value = cls.validate_number(name, value)
        if value != int(value) or not 1000 <= value <= 9999:
            raise InvalidParameterError(f"{name} must be a four digit year, got {value}")
        return int(value)

    @classmethod
    def validate_count(cls, name: str, value: Any) -> int:
        """Validate a whole, non-negative count."""
        value = cls.validate_number(name, value)
        if value != int(value):
            raise InvalidParameterError(f"{name} must be a whole number, got {value}")
        return int(value)

    @classmethod
    def validate_boolean(cls, name: str, value: Any) -> bool:
        """Validate a boolean flag, accepting the usual string spellings."""
        if isinstance(value, bool):
            return value
        if isinstance(value, str) and value.strip().lower() in ("true", "false"):
            return value.strip().lower() == "true"
        raise InvalidParameterError(f"{name} must be a boolean, got {value!r}")

    @classmethod
    def validate_text(cls, name: str, value: Any) -> str:
        """Validate a non-empty string."""
        if not isinstance(value, str):
            raise InvalidParameterError(f"{name} must be a string, got {value!r}")

        value = value.strip()
        if not value:
            raise InvalidParameterError(f"{name} cannot be empty")

        return value

    @classmethod
    def validate_text_list(cls, name: str, value: Any) -> List[str]:
        """Validate a list of strings; a single string becomes a one-item list."""
        if isinstance(value, str):
            value = [value]

        if not isinstance(value, (list, tuple)):
            raise InvalidParameterError(f"{name} must be a list of strings, got {value!r}")

        items = []
        for item in value:
            if not isinstance(item, str):
                raise InvalidParameterError(f"{name} entries must be strings, got {item!r}")
            if item.strip():
                items.append(item.strip())

        return items

    @classmethod
    def validate(cls, schema: Dict[str, str], parameters: Optional[Dict[str, Any]]) -> Dict[str, Any]:
        """
        Validate raw parameters against a parameter schema.

        Args:
            schema: Mapping of parameter name to parameter kind
            parameters: Raw parameters as produced by the classifier

        Returns:
            Dictionary with only the declared parameters, coerced to their kinds.
            Parameters that are missing or null are left out so defaults apply.

        Raises:
            InvalidParameterError: If a declared parameter cannot be coerced
        """
        if parameters is None:
            return {}

        if not isinstance(parameters, dict):
            raise InvalidParameterError("Command parameters must be an object")

        validators = {
            NUMBER: cls.validate_number,
            FRACTION: cls.validate_fraction,
            YEAR: cls.validate_year,
            COUNT: cls.validate_count,
            BOOLEAN: cls.validate_boolean,
            TEXT: cls.validate_text,
            TEXT_LIST: cls.validate_text_list,
        }

        validated = {}
        for name, kind in schema.items():
            value = parameters.get(name)
            if value is None:
                continue
            validated[name] = validators[kind](name, value)

        return validated


def validate_track_data(track_data: Dict[str, Any]) -> Dict[str, Any]:
    """
    Validate track data dictionary.

    Args:
        track_data: Dictionary containing track information

    Returns:
        Validated track data

    Raises:
        InvalidParameterError: If validation fails
    """
    if not isinstance(track_data, dict):
        raise InvalidParameterError("Track data must be a dictionary")

    required_fields = ["name", "artist", "duration_ms"]
    for field in required_fields:
        if field not in track_data:
            raise InvalidParameterError(f"Missing required field: {field}")

    if not any(track_data.get(key) not in (None, "") for key in ("id", "catalog_id", "spotify_id")):
        raise InvalidParameterError("Track needs one of: id, catalog_id, spotify_id")

    if not isinstance(track_data["name"], str) or not track_data["name"].strip():
        raise InvalidParameterError("Track name must be a non-empty string")

    if not isinstance(track_data["artist"], str):
        raise InvalidParameterError("Artist must be a string")

    duration = track_data["duration_ms"]
    if isinstance(duration, bool) or not isinstance(duration, (int, float)) or duration < 0:
        raise InvalidParameterError("Duration must be a non-negative number of milliseconds")

    genres = track_data.get("genres")
    if genres is not None and not isinstance(genres, list):
        raise InvalidParameterError("Genres must be a list")

    return track_data


def validate_playlist_data(playlist_data: Dict[str, Any]) -> Dict[str, Any]:
    """
    Validate playlist data dictionary.

    Args:
        playlist_data: Dictionary containing playlist information

    Returns:
        Validated playlist data

    Raises:
        InvalidParameterError: If validation fails
    """
    if not isinstance(playlist_data, dict):
        raise InvalidParameterError("Playlist data must be a dictionary")

    if "tracks" not in playlist_data:
        raise InvalidParameterError("Missing required field: tracks")

    if not isinstance(playlist_data["tracks"], list):
        raise InvalidParameterError("Tracks must be a list")

    for i, track in enumerate(playlist_data["tracks"]):
        try:
            validate_track_data(track)
        except InvalidParameterError as e:
            raise InvalidParameterError(f"Invalid track at index {i}: {e}")

    return playlist_data
