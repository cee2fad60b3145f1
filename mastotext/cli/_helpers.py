"""Shared CLI utilities."""

import json
from pathlib import Path

import rich_click as click

from ..config import get_emoji_table_path
from ..models.emoji import CustomEmoji
from ..renderer import load_emojis


def _read_stdin() -> str:
    return click.get_text_stream("stdin").read()


def _resolve_emojis(emoji_file: Path | None) -> list[CustomEmoji]:
    path = emoji_file or get_emoji_table_path()
    if path is None:
        return []
    try:
        return load_emojis(path)
    except FileNotFoundError:
        raise click.ClickException(f"Emoji file not found: {path}")
    except json.JSONDecodeError as exc:
        raise click.ClickException(f"Emoji file is not valid JSON: {path} ({exc})")
