"""Parse Mastodon status HTML (or plain text) into rich-text tokens."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass

from bs4 import BeautifulSoup, Tag
from bs4.element import PageElement, PreformattedString

from .link_utils import host_for, parse_url
from .models.tokens import Bold, Emoji, HashTag, Italic, LineBreak, Link, Mention, Text, Token

log = logging.getLogger(__name__)

_EMOJI_RE = re.compile(r":(\w+):")


class HtmlParsingError(Exception):
    """Base class for errors raised while parsing status HTML."""


def _node_message(message: str, node_html: str | None) -> str:
    if node_html:
        return f"{message}\nNode:\n{node_html}"
    return f"{message}\nNo node information available"


class MissingMentionAnchor(HtmlParsingError):
    """An h-card span contained no nested anchor."""

    def __init__(self, node_html: str | None = None):
        self.node_html = node_html
        super().__init__(_node_message("Failed to parse link in Mention. No inner anchor found.", node_html))


class MissingMentionNameSpan(HtmlParsingError):
    """A mention anchor contained no nested span holding the name."""

    def __init__(self, node_html: str | None = None):
        self.node_html = node_html
        super().__init__(_node_message("Failed to parse name in Mention. No inner span found.", node_html))


class UnparseableMentionInstance(HtmlParsingError):
    """A mention anchor's href was not a URL or had no host."""

    def __init__(self, url_string: str):
        self.url_string = url_string
        super().__init__(f"Failed to parse Instance from URL String: {url_string}")


@dataclass(frozen=True)
class Html:
    text: str


@dataclass(frozen=True)
class Plain:
    text: str


Input = Html | Plain


@dataclass(frozen=True)
class ParsedContent:
    """
    Content awaiting tokenisation.

    Tokens are recomputed on every call; callers that want caching should
    memoise on the input string themselves.
    """

    input: Input

    @classmethod
    def html(cls, text: str) -> ParsedContent:
        return cls(Html(text))

    @classmethod
    def plain(cls, text: str) -> ParsedContent:
        return cls(Plain(text))

    def tokens(self) -> list[Token]:
        """Parse the input. HTML errors propagate."""
        return parse(self.input)

    def tokens_or_empty(self) -> list[Token]:
        """Parse the input, degrading to no tokens when the HTML is malformed."""
        try:
            return self.tokens()
        except HtmlParsingError as exc:
            log.warning("Failed to parse status content: %s", exc)
            return []


def parse(content: ParsedContent | Input) -> list[Token]:
    """Tokenise HTML or plain-text input."""
    if isinstance(content, ParsedContent):
        content = content.input
    if isinstance(content, Html):
        return parse_html(content.text)
    return parse_plain(content.text)


def parse_plain(text: str) -> list[Token]:
    """Split plain text into text runs and ``:shortcode:`` emoji."""
    tokens: list[Token] = []
    position = 0
    for match in _EMOJI_RE.finditer(text):
        if match.start() > position:
            tokens.append(Text(text=text[position : match.start()]))
        tokens.append(Emoji(shortcode=match.group(1)))
        position = match.end()
    if position < len(text):
        tokens.append(Text(text=text[position:]))
    return tokens


def parse_html(html: str) -> list[Token]:
    """
    Tokenise a status HTML fragment.

    Each ``<p>`` is parsed as a paragraph, with two line breaks between
    consecutive paragraphs. A ``<p>`` left open by the markup is split off
    as a paragraph of its own. Without paragraphs the top-level nodes are
    parsed directly.

    Raises:
        HtmlParsingError: for a malformed h-card mention.
    """
    # A fresh tree per call; parsed documents are never shared.
    soup = BeautifulSoup(html, "html.parser")
    runs: list[list[PageElement]] = []
    for paragraph in soup.find_all("p"):
        if paragraph.find_parent("p") is None:
            runs.extend(_paragraph_runs(paragraph))
    tokens: list[Token] = []

    if runs:
        log.debug("Parsing %d paragraphs", len(runs))
        last = len(runs) - 1
        for index, run in enumerate(runs):
            for child in run:
                tokens.extend(_parse_node(child))
            if index < last:
                tokens.append(LineBreak())
                tokens.append(LineBreak())
    else:
        for child in soup.contents:
            tokens.extend(_parse_node(child))

    return tokens


def _paragraph_runs(paragraph: Tag) -> list[list[PageElement]]:
    # html.parser nests an unclosed <p> inside the previous one
    runs: list[list[PageElement]] = [[]]
    for child in paragraph.contents:
        if isinstance(child, Tag) and child.name == "p":
            runs.extend(_paragraph_runs(child))
            runs.append([])
        else:
            runs[-1].append(child)
    if len(runs) > 1:
        runs = [run for run in runs if run]
    return runs


def _outer_html(node: PageElement) -> str:
    if isinstance(node, Tag):
        return str(node)
    if isinstance(node, PreformattedString):
        return node.output_ready()
    return str(node)


def _first_child_html(node: Tag) -> str:
    if not node.contents:
        return ""
    return _outer_html(node.contents[0])


def _attr_values(node: Tag, name: str) -> list[str]:
    value = node.get(name)
    if value is None:
        return []
    if isinstance(value, str):
        return value.split()
    return list(value)


def _parse_hashtag(node: Tag) -> HashTag:
    span = node.find("span", recursive=False)
    name = _first_child_html(span) if span is not None else ""
    if not name:
        name = node.get_text().lstrip("#")
    return HashTag(name=name, url=parse_url(node.get("href")))


def _parse_anchor(node: Tag) -> Token:
    if _attr_values(node, "rel") == ["tag"]:
        return _parse_hashtag(node)
    return Link(url=parse_url(node.get("href")))


def _parse_mention(node: Tag) -> Mention:
    """
    Parse an h-card mention.

    See https://microformats.org/wiki/h-card, e.g.
    <span class="h-card"><a href="https://chitter.xyz/@codl" class="u-url mention">@<span>codl</span></a></span>
    """
    anchor = node.find("a", recursive=False)
    if anchor is None:
        raise MissingMentionAnchor(str(node))

    name_span = anchor.find("span", recursive=False)
    if name_span is None:
        raise MissingMentionNameSpan(str(anchor))

    href = anchor.get("href") or ""
    instance = host_for(href)
    if instance is None:
        raise UnparseableMentionInstance(href)

    return Mention(name=_first_child_html(name_span), instance=instance, url=href)


def _parse_node(node: PageElement) -> list[Token]:
    if isinstance(node, Tag):
        if node.name == "br":
            return [LineBreak()]
        if node.name == "strong":
            return [Bold(text=_first_child_html(node))]
        if node.name == "em":
            return [Italic(text=_first_child_html(node))]
        if node.name == "a":
            return [_parse_anchor(node)]
        if node.name == "span" and "h-card" in _attr_values(node, "class"):
            return [_parse_mention(node)]

    # Anything else is treated as plain text, which may hold custom emoji
    return parse_plain(_outer_html(node).strip("\n"))
