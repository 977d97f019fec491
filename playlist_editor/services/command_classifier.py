"""
Command classifier: maps a free-text edit instruction to one EditCommand.

Semantic understanding is delegated to a text-completion oracle. This module
owns the prompt, the expected JSON shape and the recovery policy: any failure
to obtain a well-formed object is a ClassificationError, unknown types and
actions fail loudly, and nothing is retried here.
"""

import logging
from typing import Any, Dict
from pydantic import BaseModel, Field, ValidationError, field_validator
from playlist_editor.api.interfaces import TextCompletion
from playlist_editor.exceptions import ClassificationError, ExternalServiceError
from playlist_editor.models.edit_command import EditCommand, describe_vocabulary, parse_edit_command
from playlist_editor.utils.track_utils import extract_first_json_object

logger = logging.getLogger(__name__)

SYSTEM_PROMPT = """You are a music expert and playlist curator. Parse the user's natural language
command for editing a playlist into a structured command.

Determine:
1. The command type (filter, transform, sort, expand, refine, theme)
2. The action, chosen from that type's vocabulary below
3. The action's parameters

Command types:
- filter: Remove tracks based on criteria (duration, year, genre, BPM, energy, mood, artist, title)
- transform: Change the mood, energy or vibe of the playlist
- sort: Reorder tracks by a criterion or into an energy curve
- expand: Add more tracks to the playlist
- refine: Remove tracks the user has banned or wants to avoid
- theme: Apply a specific style, era or character theme

Vocabulary (action {{parameter: kind}}):
{vocabulary}

Parameter kinds: number and year are plain numbers (min_duration is in seconds),
fraction is between 0.0 and 1.0, count is a whole number, boolean is true/false,
text is a string and text_list is an array of strings. Omit parameters the user
did not specify.

Respond with exactly one JSON object and nothing else:
{{"type": "<type>", "action": "<action>", "parameters": {{...}}}}"""

class ClassifierResponse(BaseModel):
    """Shape the completion must return."""
    type: str = Field(min_length=1)
    action: str = Field(min_length=1)
    parameters: Dict[str, Any] = Field(default_factory=dict)

    @field_validator("parameters", mode="before")
    @classmethod
    def _none_as_empty(cls, value):
        # JSON-mode models send null for parameter-less actions
        return {} if value is None else value

class CommandClassifier:
    """Turns free text into a validated EditCommand."""

    def __init__(self, completion: TextCompletion):
        self.completion = completion
        self.system_prompt = SYSTEM_PROMPT.format(vocabulary=describe_vocabulary())

    async def classify(self, command_text: str) -> EditCommand:
        """
        Classify a free-text command.

        Args:
            command_text: The user's edit instruction

        Returns:
            A validated EditCommand

        Raises:
            ClassificationError: If the oracle fails or its reply is not a command object
            UnknownCommandTypeError: If the reply names an unknown type
            UnknownActionError: If the reply names an action outside the type's vocabulary
            InvalidParameterError: If a parameter has the wrong kind
        """
        if not command_text or not command_text.strip():
            raise ClassificationError("Command text is empty")

        try:
            reply = await self.completion.complete(self.system_prompt, command_text.strip())
        except ExternalServiceError as e:
            raise ClassificationError(f"Could not understand the command: {e}") from e

        payload = extract_first_json_object(reply)
        if payload is None:
            logger.warning(f"Classifier reply contained no JSON object: {reply!r}")
            raise ClassificationError("Could not understand the command: reply was not JSON")

        # Some models nest the command under a "command" key
        if "type" not in payload and isinstance(payload.get("command"), dict):
            payload = payload["command"]

        try:
            response = ClassifierResponse.model_validate(payload)
        except ValidationError as e:
            raise ClassificationError(f"Could not understand the command: {e.error_count()} invalid fields") from e

        command = parse_edit_command(response.type, response.action, response.parameters)
        logger.info(f"Classified {command_text!r} as {command.type.value}/{command.action} {command.parameters}")
        return command
