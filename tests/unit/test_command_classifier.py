#!/usr/bin/env python3
"""
Unit tests for the command classifier.
"""

import pytest
from playlist_editor.exceptions import (
    ClassificationError,
    ExternalServiceError,
    InvalidParameterError,
    UnknownActionError,
    UnknownCommandTypeError
)
from playlist_editor.models.edit_command import CommandType
from playlist_editor.services.command_classifier import CommandClassifier

class TestCommandClassifier:
    """Unit tests for CommandClassifier."""

    @pytest.mark.asyncio
    async def test_classify_filter_command(self, fake_completion):
        completion = fake_completion({
            "type": "filter",
            "action": "remove_short_tracks",
            "parameters": {"min_duration": 150}
        })
        classifier = CommandClassifier(completion)

        command = await classifier.classify("remove songs under 2:30")

        assert command.type is CommandType.FILTER
        assert command.action == "remove_short_tracks"
        assert command.parameters == {"min_duration": 150.0}
        system_prompt, user_text = completion.calls[0]
        assert user_text == "remove songs under 2:30"
        assert "remove_short_tracks" in system_prompt
        assert "energy_curve" in system_prompt

    @pytest.mark.asyncio
    async def test_classify_json_wrapped_in_prose(self, fake_completion):
        completion = fake_completion(
            'Here you go:\n```json\n{"type": "sort", "action": "energy_curve", "parameters": {}}\n```'
        )

        command = await CommandClassifier(completion).classify("give it a nice arc")

        assert command.type is CommandType.SORT
        assert command.action == "energy_curve"

    @pytest.mark.asyncio
    async def test_classify_null_parameters(self, fake_completion):
        """A null parameters object means the action takes none."""
        completion = fake_completion('{"type": "filter", "action": "remove_duplicates", "parameters": null}')

        command = await CommandClassifier(completion).classify("remove duplicates")

        assert command.type is CommandType.FILTER
        assert command.action == "remove_duplicates"
        assert command.parameters == {}

    @pytest.mark.asyncio
    async def test_classify_nested_command_key(self, fake_completion):
        completion = fake_completion({"command": {"type": "refine", "action": "remove_banned"}})

        command = await CommandClassifier(completion).classify("clean it up")

        assert command.type is CommandType.REFINE
        assert command.parameters == {}

    @pytest.mark.asyncio
    async def test_unknown_type_fails_loudly(self, fake_completion):
        completion = fake_completion({"type": "bogus", "action": "remove_short_tracks", "parameters": {}})

        with pytest.raises(UnknownCommandTypeError):
            await CommandClassifier(completion).classify("do something odd")

    @pytest.mark.asyncio
    async def test_unknown_action_fails_loudly(self, fake_completion):
        completion = fake_completion({"type": "sort", "action": "shuffle", "parameters": {}})

        with pytest.raises(UnknownActionError):
            await CommandClassifier(completion).classify("shuffle it")

    @pytest.mark.asyncio
    async def test_invalid_parameter(self, fake_completion):
        completion = fake_completion({"type": "filter", "action": "remove_low_energy", "parameters": {"min_energy": 7}})

        with pytest.raises(InvalidParameterError):
            await CommandClassifier(completion).classify("only bangers")

    @pytest.mark.asyncio
    async def test_reply_without_json(self, fake_completion):
        completion = fake_completion("I am not sure what you mean.")

        with pytest.raises(ClassificationError, match="not JSON"):
            await CommandClassifier(completion).classify("hmm")

    @pytest.mark.asyncio
    async def test_reply_missing_fields(self, fake_completion):
        completion = fake_completion({"type": "filter"})

        with pytest.raises(ClassificationError):
            await CommandClassifier(completion).classify("filter it")

    @pytest.mark.asyncio
    async def test_oracle_failure_becomes_classification_error(self, fake_completion):
        completion = fake_completion(ExternalServiceError("timed out"))

        with pytest.raises(ClassificationError, match="timed out"):
            await CommandClassifier(completion).classify("make it chill")

    @pytest.mark.asyncio
    async def test_empty_command_is_not_sent(self, mock_completion):
        with pytest.raises(ClassificationError):
            await CommandClassifier(mock_completion).classify("   ")

        mock_completion.complete.assert_not_called()
