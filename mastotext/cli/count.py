"""Character count command."""

import json

import rich_click as click

from ..composer import remaining_characters_message
from ..counter import MAX_CHARACTERS, StatusCharacterCounter
from ._console import console
from ._helpers import _read_stdin


@click.command()
@click.argument("text", required=False)
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
def count(text: str | None, as_json: bool):
    """Count TEXT (default: stdin) using Mastodon's posting-limit rules."""
    if text is None:
        # Drop the newline terminating piped input
        text = _read_stdin().removesuffix("\n")

    counter = StatusCharacterCounter()
    total = counter.count(text)
    remaining = MAX_CHARACTERS - total

    if as_json:
        payload = {
            "count": total,
            "remaining": remaining,
            "max_characters": MAX_CHARACTERS,
            "urls": counter.url_matches(text),
            "external_instances": counter.external_instances(text),
        }
        click.echo(json.dumps(payload, indent=2))
        return

    style = "green" if remaining >= 0 else "red"
    console.print(f"Count: {total}")
    console.print(f"[{style}]{remaining_characters_message(remaining)}[/{style}]")
