"""
Structured edit commands.

An EditCommand is the typed result of classifying a free-text instruction.
There is one subclass per command type; parse_edit_command validates the
type, the action and the parameters against ACTION_TABLE so an unknown
combination fails when the command is built, never inside a strategy.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Any, Type
from playlist_editor.exceptions import UnknownActionError, UnknownCommandTypeError
from playlist_editor.utils.validators import (
    ParameterValidator,
    NUMBER,
    FRACTION,
    YEAR,
    COUNT,
    BOOLEAN,
    TEXT,
    TEXT_LIST,
)

class CommandType(str, Enum):
    """The six kinds of playlist edit."""
    FILTER = "filter"
    TRANSFORM = "transform"
    SORT = "sort"
    EXPAND = "expand"
    REFINE = "refine"
    THEME = "theme"

# Per-type action vocabulary with the parameter schema of each action
ACTION_TABLE: Dict[CommandType, Dict[str, Dict[str, str]]] = {
    CommandType.FILTER: {
        "remove_short_tracks": {"min_duration": NUMBER},
        "remove_by_year": {"before_year": YEAR, "after_year": YEAR},
        "remove_by_genre": {"exclude_genres": TEXT_LIST},
        "remove_low_energy": {"min_energy": FRACTION},
        "remove_low_valence": {"min_valence": FRACTION},
        "remove_by_bpm": {"min_bpm": NUMBER, "max_bpm": NUMBER},
        "remove_by_artist": {"exclude_artists": TEXT_LIST},
        "remove_duplicates": {},
        "remove_title_keywords": {"keywords": TEXT_LIST},
        "remove_non_english": {},
    },
    CommandType.SORT: {
        "sort_by_bpm": {"ascending": BOOLEAN},
        "sort_by_energy": {},
        "sort_by_valence": {},
        "sort_by_year": {},
        "energy_curve": {},
    },
    CommandType.TRANSFORM: {
        "change_mood": {"target_mood": TEXT},
    },
    CommandType.EXPAND: {
        "add_tracks": {"expansion_type": TEXT, "target_size": COUNT},
    },
    CommandType.REFINE: {
        "remove_banned": {},
    },
    CommandType.THEME: {
        "apply_theme": {"theme": TEXT},
    },
}

@dataclass(frozen=True)
class EditCommand:
    """Base class for structured edit commands."""
    action: str
    parameters: Dict[str, Any] = field(default_factory=dict)

    command_type = None  # set by each subclass

    @property
    def type(self) -> CommandType:
        return self.command_type

    def get(self, name: str, default: Any = None) -> Any:
        """Read a validated parameter, falling back to a default when absent."""
        value = self.parameters.get(name)
        return default if value is None else value

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": self.command_type.value,
            "action": self.action,
            "parameters": dict(self.parameters)
        }

@dataclass(frozen=True)
class FilterCommand(EditCommand):
    """Remove tracks failing a predicate."""
    command_type = CommandType.FILTER

@dataclass(frozen=True)
class SortCommand(EditCommand):
    """Permute the track order."""
    command_type = CommandType.SORT

@dataclass(frozen=True)
class TransformCommand(EditCommand):
    """Shift the playlist toward a target mood."""
    command_type = CommandType.TRANSFORM

@dataclass(frozen=True)
class ExpandCommand(EditCommand):
    """Grow the playlist toward a target size."""
    command_type = CommandType.EXPAND

@dataclass(frozen=True)
class RefineCommand(EditCommand):
    """Apply the user's preference-based exclusions."""
    command_type = CommandType.REFINE

@dataclass(frozen=True)
class ThemeCommand(EditCommand):
    """Apply a style, era or character theme."""
    command_type = CommandType.THEME

COMMAND_CLASSES: Dict[CommandType, Type[EditCommand]] = {
    CommandType.FILTER: FilterCommand,
    CommandType.SORT: SortCommand,
    CommandType.TRANSFORM: TransformCommand,
    CommandType.EXPAND: ExpandCommand,
    CommandType.REFINE: RefineCommand,
    CommandType.THEME: ThemeCommand,
}

def parse_command_type(value: Any) -> CommandType:
    """Map a raw type string to a CommandType."""
    if isinstance(value, CommandType):
        return value
    try:
        return CommandType(str(value).strip().lower())
    except ValueError:
        raise UnknownCommandTypeError(str(value))

def parse_edit_command(command_type: Any, action: Any, parameters: Dict[str, Any] = None) -> EditCommand:
    """
    Build a validated EditCommand.

    Args:
        command_type: One of the CommandType values
        action: Action name from the type's vocabulary
        parameters: Raw parameters; undeclared keys are dropped

    Raises:
        UnknownCommandTypeError: If the type is not one of the six known types
        UnknownActionError: If the action is not in the type's vocabulary
        InvalidParameterError: If a parameter cannot be coerced
    """
    command_type = parse_command_type(command_type)
    action_name = str(action).strip().lower()

    schemas = ACTION_TABLE[command_type]
    if action_name not in schemas:
        raise UnknownActionError(command_type.value, str(action))

    validated = ParameterValidator.validate(schemas[action_name], parameters)
    return COMMAND_CLASSES[command_type](action=action_name, parameters=validated)

def describe_vocabulary() -> str:
    """Render the action table as prompt-ready text, one type per block."""
    lines = []
    for command_type, actions in ACTION_TABLE.items():
        lines.append(f"- {command_type.value}:")
        for action, schema in actions.items():
            params = ", ".join(f"{name}: {kind}" for name, kind in schema.items())
            lines.append(f"    - {action} {{{params}}}")
    return "\n".join(lines)
