"""Parse and render commands."""

from pathlib import Path

import rich_click as click
from pydantic import ValidationError
from rich.markup import escape
from rich.table import Table

from ..models.config import MastotextConfig
from ..models.tokens import Bold, Emoji, HashTag, Italic, Link, Mention, Text, Token, TokenList
from ..parsed_text import HtmlParsingError, ParsedContent
from ._console import console
from ._helpers import _resolve_emojis


def _token_row(token: Token) -> tuple[str, str, str]:
    if isinstance(token, (Text, Bold, Italic)):
        return token.kind, repr(token.text), ""
    if isinstance(token, HashTag):
        return token.kind, token.name, token.url or ""
    if isinstance(token, Mention):
        return token.kind, token.name, f"{token.instance} {token.url}"
    if isinstance(token, Link):
        return token.kind, token.surface, ""
    if isinstance(token, Emoji):
        return token.kind, token.shortcode, ""
    return token.kind, "", ""


@click.command()
@click.argument("source", type=click.File("r"), default="-")
@click.option("--plain", is_flag=True, help="Treat input as plain text instead of HTML")
@click.option("--json", "as_json", is_flag=True, help="Output tokens as JSON")
def parse(source, plain: bool, as_json: bool):
    """Tokenise status content read from SOURCE (default: stdin)."""
    content = source.read()
    parsed = ParsedContent.plain(content) if plain else ParsedContent.html(content)
    try:
        tokens = parsed.tokens()
    except HtmlParsingError as e:
        raise click.ClickException(str(e))

    if as_json:
        click.echo(TokenList.dump_json(tokens, indent=2).decode())
        return

    if not tokens:
        console.print("No tokens found.")
        return

    table = Table(title=f"Tokens ({len(tokens)})")
    table.add_column("#", justify="right")
    table.add_column("Kind", style="bold")
    table.add_column("Value")
    table.add_column("Detail", style="dim")
    for idx, token in enumerate(tokens, start=1):
        kind, value, detail = _token_row(token)
        table.add_row(str(idx), kind, escape(value), escape(detail))
    console.print(table)


@click.command()
@click.argument("source", type=click.File("r"), default="-")
@click.option("--plain-input", is_flag=True, help="Treat input as plain text instead of HTML")
@click.option(
    "--format",
    "-f",
    "fmt",
    type=click.Choice(["markdown", "text"]),
    help="Output format (default from config)",
)
@click.option(
    "--emoji-file",
    type=click.Path(path_type=Path, dir_okay=False),
    help="JSON list of custom emoji to inline",
)
def render(source, plain_input: bool, fmt: str | None, emoji_file: Path | None):
    """Render status content read from SOURCE (default: stdin)."""
    from ..config import get_config_path, load_config
    from ..renderer import render_content

    try:
        config = MastotextConfig.model_validate(load_config())
    except ValidationError as e:
        raise click.ClickException(f"Invalid configuration in {get_config_path()}\n{e}") from e
    emojis = _resolve_emojis(emoji_file)
    output = render_content(source.read(), emojis=emojis, fmt=fmt, plain=plain_input, config=config)
    click.echo(output)
