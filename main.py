#!/usr/bin/env python3
"""
AI Playlist Editor
Main CLI entry point for editing a playlist with natural-language commands.
"""

import sys
import json
import asyncio
import argparse
import logging
import os

from config.settings import Settings
from playlist_editor.exceptions import (
    ClassificationError,
    PlaylistEditError,
    UnknownActionError,
    UnknownCommandTypeError,
)
from playlist_editor.models.edit_command import ACTION_TABLE
from playlist_editor.models.playlist import Playlist
from playlist_editor.services.editor import PlaylistEditor
from playlist_editor.utils.validators import validate_playlist_data

logger = logging.getLogger(__name__)

def run_tests():
    """Run the test suite."""
    import pytest

    print("🧪 Running Playlist Editor Test Suite...")
    print("=" * 60)

    exit_code = pytest.main(["-v", "--tb=short", "tests/"])
    if exit_code == 0:
        print("\n✅ All tests passed!")
    else:
        print(f"\n❌ Some tests failed (exit code: {exit_code})")
    return exit_code

def configure_logging(settings: Settings):
    logging.basicConfig(level=settings.log_level.upper(), format=settings.log_format)

def load_json(path: str):
    with open(path, "r", encoding="utf-8") as f:
        return json.load(f)

def load_playlist(path: str) -> Playlist:
    """Load a playlist file; a bare list of tracks is accepted too."""
    data = load_json(path)
    if isinstance(data, list):
        data = {"id": os.path.splitext(os.path.basename(path))[0], "tracks": data}
    validate_playlist_data(data)
    playlist = Playlist.from_dict(data)
    playlist.tracks = playlist.ordered_tracks()
    return playlist

def display_edit_summary(result, before_count: int):
    """Display what an edit did."""
    print("\n" + "=" * 60)
    print(f"🎵 {result.explanation}")
    print("=" * 60)
    print(f"Tracks: {before_count} → {len(result.tracks)}")

    if result.changes:
        print("\nChanges:")
        for change in result.changes:
            print(f"  • {change}")
    else:
        print("\nNo changes.")

    print("\nTracks:")
    print("-" * 60)
    for i, track in enumerate(result.tracks[:15], 1):
        energy = track.energy if track.energy is not None else "N/A"
        tempo = f"{track.tempo:.0f}" if track.tempo is not None else "N/A"
        print(f"{i:2d}. {track.name} - {track.artist}")
        print(f"    Duration: {track.duration_formatted} | Energy: {energy} | BPM: {tempo}")

    if len(result.tracks) > 15:
        print(f"    ... and {len(result.tracks) - 15} more tracks")
    print("-" * 60)

async def edit_playlist(args) -> int:
    """Apply one natural-language edit to a playlist file."""
    settings = Settings()
    configure_logging(settings)

    try:
        settings.validate(require_openai=True)
    except ValueError as e:
        print(f"❌ {e}")
        return 1

    try:
        playlist = load_playlist(args.playlist_file)
        preferences = load_json(args.preferences) if args.preferences else None
    except (OSError, ValueError) as e:
        print(f"❌ Could not read input: {e}")
        return 1

    before_count = playlist.track_count
    logger.info(f"Loaded {before_count} tracks from {args.playlist_file}")
    try:
        async with PlaylistEditor.from_settings(settings) as editor:
            result = await editor.process_command(playlist.tracks, args.command, preferences)
    except ClassificationError as e:
        print(f"❌ Could not understand the command: {e}")
        return 1
    except (UnknownCommandTypeError, UnknownActionError) as e:
        print(f"❌ Unsupported edit: {e}")
        return 1
    except PlaylistEditError as e:
        print(f"❌ Edit failed: {e}")
        return 1

    display_edit_summary(result, before_count)

    if args.dry_run:
        print("\n📝 Dry run: playlist file not written")
        return 0

    playlist.apply_edit(result)
    output_path = args.output or args.playlist_file
    with open(output_path, "w", encoding="utf-8") as f:
        json.dump(playlist.to_dict(), f, indent=2)
    print(f"\n💾 Playlist saved to: {output_path}")
    return 0

def list_actions():
    """Print the command vocabulary."""
    print("Available edit commands:")
    for command_type, actions in ACTION_TABLE.items():
        print(f"\n{command_type.value}")
        for action, schema in actions.items():
            params = ", ".join(f"{name} ({kind})" for name, kind in schema.items()) or "no parameters"
            print(f"  {action}: {params}")

def main():
    """Main entry point with command line argument parsing."""
    parser = argparse.ArgumentParser(description='AI Playlist Editor')
    subparsers = parser.add_subparsers(dest='command_name', help='Available commands')

    edit_parser = subparsers.add_parser('edit', help='Edit a playlist with a natural-language command')
    edit_parser.add_argument('playlist_file', type=str, help='Path to playlist JSON file')
    edit_parser.add_argument('command', type=str, help='Edit instruction, e.g. "remove songs under 2:30"')
    edit_parser.add_argument('--preferences', type=str, help='Path to user preferences JSON file')
    edit_parser.add_argument('--output', type=str, help='Output file path (default: overwrite input)')
    edit_parser.add_argument('--dry-run', action='store_true', dest='dry_run', help='Show the result without saving')

    subparsers.add_parser('actions', help='List the supported command types and actions')
    subparsers.add_parser('test', help='Run the test suite')

    args = parser.parse_args()

    if args.command_name == 'edit':
        sys.exit(asyncio.run(edit_playlist(args)))
    elif args.command_name == 'actions':
        list_actions()
    elif args.command_name == 'test':
        sys.exit(run_tests())
    else:
        parser.print_help()

if __name__ == "__main__":
    main()
