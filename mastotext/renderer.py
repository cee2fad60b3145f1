"""Plain text and Markdown output for parsed status content."""

from __future__ import annotations

import json
import logging
import re
from collections.abc import Iterable, Mapping
from pathlib import Path

from .config import load_config
from .link_utils import view_tag_url, view_user_url
from .models.config import MastotextConfig
from .models.emoji import CustomEmoji
from .models.tokens import (
    INVALID_URL_TEXT,
    Bold,
    Emoji,
    HashTag,
    Italic,
    LineBreak,
    Link,
    Mention,
    Text,
    Token,
)
from .parsed_text import ParsedContent

log = logging.getLogger(__name__)

EmojiUrlTable = dict[str, str | None]

_UNNAMED_EMOJI = "--NO-NAME"
_MARKDOWN_SPECIAL_RE = re.compile(r"([\\`*_\[\]])")


def _escape(text: str) -> str:
    return _MARKDOWN_SPECIAL_RE.sub(r"\\\1", text)


def emoji_url_table(emojis: Iterable[CustomEmoji]) -> EmojiUrlTable:
    """Map emoji shortcodes to image URLs."""
    return {(emoji.shortcode or _UNNAMED_EMOJI): emoji.url for emoji in emojis}


def emojis_used(tokens: Iterable[Token]) -> set[str]:
    """Shortcodes of the custom emoji referenced by ``tokens``."""
    return {token.shortcode for token in tokens if isinstance(token, Emoji)}


def load_emojis(path: Path) -> list[CustomEmoji]:
    """Load a JSON list of custom emoji, as served by /api/v1/custom_emojis."""
    with open(path) as f:
        decoded = json.load(f)
    if not isinstance(decoded, list):
        log.warning("Emoji file %s does not hold a list, ignoring", path)
        return []
    return [CustomEmoji.model_validate(item) for item in decoded if isinstance(item, dict)]


def to_plain_text(tokens: Iterable[Token], invalid_url_text: str = INVALID_URL_TEXT) -> str:
    """Concatenate the textual form of each token."""
    parts = []
    for token in tokens:
        if isinstance(token, Link) and token.url is None:
            parts.append(invalid_url_text)
        else:
            parts.append(token.surface)
    return "".join(parts)


def _render_token(
    token: Token,
    emoji_urls: Mapping[str, str | None],
    internal_links: bool,
    invalid_url_text: str,
) -> str:
    if isinstance(token, LineBreak):
        return "\n"
    if isinstance(token, Text):
        return _escape(token.text)
    if isinstance(token, Bold):
        return f"**{_escape(token.text)}**" if token.text else ""
    if isinstance(token, Italic):
        return f"*{_escape(token.text)}*" if token.text else ""
    if isinstance(token, HashTag):
        label = _escape(token.surface)
        if internal_links:
            return f"[{label}]({view_tag_url(token.name)})"
        if token.url:
            return f"[{label}]({token.url})"
        return label
    if isinstance(token, Mention):
        label = _escape(token.surface)
        target = view_user_url(token.name, token.instance) if internal_links else token.url
        return f"[{label}]({target})"
    if isinstance(token, Link):
        if token.url is None:
            return invalid_url_text
        return f"[{_escape(token.url)}]({token.url})"
    if isinstance(token, Emoji):
        url = emoji_urls.get(token.shortcode)
        if url:
            return f"![{token.surface}]({url})"
        return token.surface
    raise TypeError(f"Unknown token: {token!r}")


def to_markdown(
    tokens: Iterable[Token],
    emoji_urls: Mapping[str, str | None] | None = None,
    internal_links: bool = True,
    invalid_url_text: str = INVALID_URL_TEXT,
) -> str:
    """
    Render tokens as Markdown.

    Hashtags and mentions link to internal navigation URLs unless
    ``internal_links`` is False, in which case the server URLs are used.
    Emoji with a known image URL become inline images.
    """
    table = emoji_urls or {}
    return "".join(_render_token(token, table, internal_links, invalid_url_text) for token in tokens)


def render_content(
    content: str,
    emojis: Iterable[CustomEmoji] = (),
    fmt: str | None = None,
    plain: bool = False,
    config: MastotextConfig | None = None,
) -> str:
    """
    Parse and render status content.

    Malformed HTML renders as an empty string; the error is logged.
    """
    if config is None:
        config = MastotextConfig.model_validate(load_config())
    fmt = fmt or config.render.format

    parsed = ParsedContent.plain(content) if plain else ParsedContent.html(content)
    tokens = parsed.tokens_or_empty()

    if fmt == "text":
        return to_plain_text(tokens, invalid_url_text=config.render.invalid_url_text)
    return to_markdown(
        tokens,
        emoji_urls=emoji_url_table(emojis),
        internal_links=config.render.internal_links,
        invalid_url_text=config.render.invalid_url_text,
    )
